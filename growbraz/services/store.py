"""Redis-backed persistence of the record collections.

Each collection is a single key holding the whole collection as a JSON array;
every save rewrites the full array.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = structlog.get_logger("growbraz.store")


class Collection(StrEnum):
	spaces = "spaces"
	plants = "plants"


class CollectionStore:
	"""Load and save whole collections under ``{key_prefix}:{collection}``."""

	def __init__(self, redis_client: Redis, key_prefix: str = "growbraz"):
		self.redis_client = redis_client
		self.key_prefix = key_prefix

	def key_for(self, collection: Collection) -> str:
		return f"{self.key_prefix}:{collection.value}"

	async def load(self, collection: Collection) -> list[dict[str, Any]] | None:
		"""Return the stored records, or ``None`` when nothing usable is stored."""
		key = self.key_for(collection)
		try:
			value = await self.redis_client.get(key)
		except (RedisError, OSError) as exc:
			logger.warning("store_load_failed", key=key, error=str(exc))
			return None
		if value is None:
			return None

		try:
			records = json.loads(value)
		except json.JSONDecodeError as exc:
			logger.warning("store_payload_undecodable", key=key, error=str(exc))
			return None
		if not isinstance(records, list):
			logger.warning("store_payload_not_a_list", key=key, payload_type=type(records).__name__)
			return None
		return records

	async def save(self, collection: Collection, records: list[dict[str, Any]]) -> bool:
		"""Write the full collection. Failures are logged and reported, not raised."""
		key = self.key_for(collection)
		try:
			await self.redis_client.set(key, json.dumps(records, ensure_ascii=False))
		except (RedisError, OSError) as exc:
			logger.warning("store_save_failed", key=key, records=len(records), error=str(exc))
			return False
		logger.debug("store_saved", key=key, records=len(records))
		return True
