"""HTTP handler for notification preferences."""

import structlog
from fastapi import HTTPException, Request, status
from pydantic import ValidationError

from luchadeer.dto import PreferenceRequest
from luchadeer.services import PreferenceService

log = structlog.get_logger(__name__)


class PreferenceHandler:
    """HTTP handler for POST /api/1/preferences."""

    def __init__(self, preference_service: PreferenceService) -> None:
        """Initialize the preference handler.

        Args:
            preference_service: The preference service (required).
        """
        self._preferences = preference_service

    async def update_preferences(self, request: Request) -> dict:
        """Handle POST /api/1/preferences requests.

        The body is decoded here rather than by FastAPI so malformed JSON
        answers 500, which existing clients expect.

        Returns:
            Dict with the stored registration id and categories

        Raises:
            HTTPException: 500 if the body cannot be decoded or the store fails
        """
        body = await request.body()
        try:
            preference_request = PreferenceRequest.model_validate_json(body)
        except ValidationError as e:
            log.error("preferences.decode.failed", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error decoding json",
            ) from e

        try:
            stored = await self._preferences.update(preference_request)
        except Exception as e:
            log.error("preferences.update.failed", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error updating preferences",
            ) from e

        return {
            "success": True,
            "registration_id": stored.registration_id,
            "categories": stored.categories,
        }
