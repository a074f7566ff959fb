"""Agency back-office service."""

__version__ = "0.1.0"
