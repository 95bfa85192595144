from __future__ import annotations

import json

import pytest
from httpx import AsyncClient

from growbraz.models import MS_PER_DAY
from growbraz.services.grow_service import GrowService
from tests.conftest import FakeAdvisor, FakeClock, FakeRedis


@pytest.mark.asyncio
async def test_ask_endpoint_passes_snapshot(
    client: AsyncClient, service: GrowService, fake_advisor: FakeAdvisor, clock: FakeClock
) -> None:
    plant = await service.create_plant({"name": "Glookies #1", "grow_space_id": "1", "strain": "Glookies"})
    assert plant is not None
    clock.advance(21 * MS_PER_DAY)

    response = await client.post(f"/api/v1/ask/{plant.id}", json={"question": "Qual o pH ideal?"})

    assert response.status_code == 200
    body = response.json()
    assert body == {"plantId": plant.id, "question": "Qual o pH ideal?", "answer": fake_advisor.answer}
    [(snapshot, question)] = fake_advisor.calls
    assert question == "Qual o pH ideal?"
    assert snapshot.name == "Glookies #1"
    assert snapshot.strain == "Glookies"
    assert snapshot.stage == "Germination"
    assert snapshot.age_days == 21


@pytest.mark.asyncio
async def test_ask_unknown_plant(client: AsyncClient, fake_advisor: FakeAdvisor) -> None:
    response = await client.post("/api/v1/ask/missing", json={"question": "Oi?"})

    assert response.status_code == 404
    assert fake_advisor.calls == []


@pytest.mark.asyncio
async def test_ask_requires_question(client: AsyncClient, service: GrowService) -> None:
    plant = await service.create_plant({"name": "P", "grow_space_id": "1"})
    assert plant is not None

    response = await client.post(f"/api/v1/ask/{plant.id}", json={"question": ""})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_ask_about_partial_stored_plant(
    client: AsyncClient, service: GrowService, fake_redis: FakeRedis, fake_advisor: FakeAdvisor
) -> None:
    fake_redis.data["test:plants"] = json.dumps([{"id": "x1", "name": "Legacy"}])
    await service.load()

    response = await client.post("/api/v1/ask/x1", json={"question": "Oi?"})

    assert response.status_code == 409
    assert fake_advisor.calls == []
