"""Notification preference service."""

import structlog

from luchadeer.dto import PreferenceRequest
from luchadeer.entities import NotificationPreference
from luchadeer.protocols import PreferenceStore

log = structlog.get_logger(__name__)


class PreferenceService:
    """Forwards preference updates to the preference store."""

    def __init__(self, store: PreferenceStore) -> None:
        self._store = store

    async def update(self, request: PreferenceRequest) -> NotificationPreference:
        """Upsert the preference described by a client request.

        Args:
            request: Validated preference request

        Returns:
            The stored preference
        """
        preference = NotificationPreference(
            registration_id=request.registration_id,
            categories=list(request.categories),
        )
        return await self._store.upsert(preference)

    async def subscriptions(self, category: str) -> list[NotificationPreference]:
        """List the devices subscribed to a category.

        Used by the push fan-out to resolve registration ids for an alert.
        """
        preferences = await self._store.subscriptions(category)
        log.debug("preferences.subscriptions", category=category, count=len(preferences))
        return preferences
