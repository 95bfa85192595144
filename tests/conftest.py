"""Shared pytest fixtures: fake Redis, fixed clock, fake advisor and the async test client."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from growbraz.dependencies import get_advisor, get_grow_service
from growbraz.main import app
from growbraz.services.advisor_service import PlantSnapshot
from growbraz.services.grow_service import GrowService
from growbraz.services.store import CollectionStore

START_MS = 1_760_000_000_000


class FakeRedis:
	"""Dict-backed stand-in for the two Redis commands the store uses."""

	def __init__(self, data: dict[str, str] | None = None) -> None:
		self.data: dict[str, str] = dict(data or {})
		self.fail_reads = False
		self.fail_writes = False
		self.set_calls: list[str] = []

	async def get(self, key: str) -> str | None:
		if self.fail_reads:
			raise RedisConnectionError("redis unavailable")
		return self.data.get(key)

	async def set(self, key: str, value: str) -> bool:
		if self.fail_writes:
			raise RedisConnectionError("redis unavailable")
		self.set_calls.append(key)
		self.data[key] = value
		return True


class FakeClock:
	def __init__(self, now: int = START_MS) -> None:
		self.now = now

	def __call__(self) -> int:
		return self.now

	def advance(self, ms: int) -> None:
		self.now += ms


class FakeAdvisor:
	def __init__(self, answer: str = "Mantenha o pH entre 6.0 e 6.5.") -> None:
		self.answer = answer
		self.calls: list[tuple[PlantSnapshot, str]] = []

	async def get_advice(self, snapshot: PlantSnapshot, question: str) -> str:
		self.calls.append((snapshot, question))
		return self.answer


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def store(fake_redis: FakeRedis) -> CollectionStore:
	return CollectionStore(fake_redis, key_prefix="test")


@pytest.fixture
def clock() -> FakeClock:
	return FakeClock()


@pytest.fixture
async def service(store: CollectionStore, clock: FakeClock) -> GrowService:
	"""A loaded service over an empty store, without seed records."""
	grow_service = GrowService(store, clock=clock, seed_defaults=False)
	await grow_service.load()
	return grow_service


@pytest.fixture
def fake_advisor() -> FakeAdvisor:
	return FakeAdvisor()


@pytest.fixture
async def client(service: GrowService, fake_advisor: FakeAdvisor) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and services injected."""
	app.dependency_overrides[get_grow_service] = lambda: service
	app.dependency_overrides[get_advisor] = lambda: fake_advisor
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
