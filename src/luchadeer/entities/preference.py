"""Notification preference entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NotificationPreference:
    """Push notification categories a device subscribed to.

    Attributes:
        registration_id: The messaging gateway registration id (unique per device)
        categories: Category names the device wants alerts for
        last_updated: When the preference was last written
    """

    registration_id: str
    categories: list[str] = field(default_factory=list)
    last_updated: datetime | None = None
