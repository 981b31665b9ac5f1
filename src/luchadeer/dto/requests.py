"""Request DTOs for API endpoints."""

from pydantic import AliasChoices, BaseModel, Field


class PreferenceRequest(BaseModel):
    """Request DTO for updating notification preferences.

    Older clients send ``gcm_registration_id``; both spellings are accepted.
    """

    registration_id: str = Field(
        ...,
        description="Messaging gateway registration id of the device",
        min_length=1,
        validation_alias=AliasChoices("registration_id", "gcm_registration_id"),
    )
    categories: list[str] = Field(
        default_factory=list,
        description="Categories to receive push alerts for",
    )
