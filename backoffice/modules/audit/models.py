"""Domain model for audit log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(slots=True)
class AuditEntry:
    id: str
    user_id: Optional[str]
    action: str
    entity_type: str
    entity_id: Optional[str]
    old_values: Optional[dict[str, Any]]
    new_values: Optional[dict[str, Any]]
    created_at: Optional[datetime]
    ip_address: Optional[str] = None
