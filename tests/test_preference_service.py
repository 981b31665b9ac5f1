"""
Tests for PreferenceService.
"""

import pytest

from luchadeer.dto import PreferenceRequest
from luchadeer.services import PreferenceService


@pytest.mark.asyncio
async def test_update_forwards_to_store(preference_store):
    service = PreferenceService(store=preference_store)
    request = PreferenceRequest.model_validate({"gcm_registration_id": "device-1", "categories": ["Reviews"]})

    stored = await service.update(request)

    assert stored.registration_id == "device-1"
    assert preference_store.records["device-1"].categories == ["Reviews"]


@pytest.mark.asyncio
async def test_subscriptions_by_category(preference_store):
    service = PreferenceService(store=preference_store)
    await service.update(PreferenceRequest(registration_id="a", categories=["live", "Reviews"]))
    await service.update(PreferenceRequest(registration_id="b", categories=["Reviews"]))

    assert [p.registration_id for p in await service.subscriptions("live")] == ["a"]
    assert sorted(p.registration_id for p in await service.subscriptions("Reviews")) == ["a", "b"]
