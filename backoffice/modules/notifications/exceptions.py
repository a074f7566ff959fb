"""Notification delivery errors."""


class NotificationError(Exception):
    """Raised when a notification cannot be handed to the mail provider."""
