"""Notification preference storage protocol."""

from typing import Protocol, runtime_checkable

from luchadeer.entities import NotificationPreference


@runtime_checkable
class PreferenceStore(Protocol):
    """Protocol for the durable notification preference store."""

    async def upsert(self, preference: NotificationPreference) -> NotificationPreference:
        """Create or replace the preference for a registration id.

        Idempotent by registration id: writing the same record twice leaves
        a single record.

        Args:
            preference: The preference to store

        Returns:
            The stored preference, with last_updated set
        """
        ...

    async def subscriptions(self, category: str) -> list[NotificationPreference]:
        """List every preference subscribed to a category.

        Args:
            category: Category name (e.g. "Quick Looks", "live")

        Returns:
            Matching preferences
        """
        ...
