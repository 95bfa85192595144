"""Grow space and plant CRUD with write-through persistence."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from growbraz.models.enums import Genetics, GrowStage
from growbraz.models.records import (
	MS_PER_DAY,
	GrowSpace,
	MaintenanceLog,
	Plant,
	Record,
	now_ms,
	parse_records,
	plant_age_days,
)
from growbraz.services.store import Collection, CollectionStore

logger = structlog.get_logger("growbraz.grow")

DEFAULT_STRAIN = "Strain Desconhecida"
DEFAULT_TEXT = "N/A"

_PROTECTED_FIELDS = frozenset({"id", "logs"})
_ID_LENGTH = 9


def _seed_spaces(_now: int) -> list[GrowSpace]:
	return [
		GrowSpace(
			id="1",
			name="Grow Alpha",
			dimensions="60x60x160",
			light_type="LED Full Spectrum",
			light_power=240,
		)
	]


def _seed_plants(now: int) -> list[Plant]:
	return [
		Plant(
			id="p1",
			grow_space_id="1",
			name="Glookies #1",
			strain="Glookies",
			genetics=Genetics.photoperiod,
			seed_bank="Barney's Farm",
			start_date=now - 30 * MS_PER_DAY,
			current_stage=GrowStage.vegetative,
			logs=[],
		)
	]


def _is_blank(value: Any) -> bool:
	return value is None or not str(value).strip()


def _field(record: Any, name: str) -> Any:
	"""Read a field from a record, including entries loaded malformed from the store."""
	if isinstance(record, dict):
		return record.get(to_camel(name))
	return getattr(record, name, None)


def _stored(value: Any) -> Any:
	if isinstance(value, Record):
		return value.to_record()
	if isinstance(value, list):
		return [_stored(item) for item in value]
	return value


def _merged(model: type[Record], record: Any, changes: Mapping[str, Any]) -> Any:
	"""Apply field changes to a typed record or to a raw stored entry.

	A raw entry that validates after the merge is promoted to a typed record;
	otherwise it stays raw, carrying the new values under their stored names.
	"""
	if isinstance(record, Record):
		return record.model_copy(update=changes)
	merged = {**record, **{model.model_fields[name].alias or name: _stored(value) for name, value in changes.items()}}
	try:
		return model.model_validate(merged)
	except ValidationError:
		return merged


class GrowService:
	"""Holds the grow-space and plant collections and mirrors every mutation to the store.

	Validation failures and unknown ids are no-ops: creates and updates return
	``None``, deletes return ``False``. Nothing is raised to the caller.
	"""

	def __init__(
		self,
		store: CollectionStore,
		*,
		clock: Callable[[], int] = now_ms,
		seed_defaults: bool = True,
	):
		self.store = store
		self.clock = clock
		self.seed_defaults = seed_defaults
		# raw stored values that fail validation sit alongside the typed records
		self._spaces: list[GrowSpace] = []
		self._plants: list[Plant] = []
		self._lock = asyncio.Lock()

	async def load(self) -> None:
		"""Populate both collections from the store, seeding any that are absent."""
		now = self.clock()
		self._spaces = await self._load_collection(Collection.spaces, GrowSpace, _seed_spaces(now))
		self._plants = await self._load_collection(Collection.plants, Plant, _seed_plants(now))

	# ── Grow spaces ──────────────────────────────────────────────────────────

	def list_grow_spaces(self) -> list[GrowSpace]:
		return list(self._spaces)

	def get_grow_space(self, space_id: str) -> GrowSpace | None:
		index = self._index_of(self._spaces, space_id)
		return None if index is None else self._spaces[index]

	async def create_grow_space(self, fields: Mapping[str, Any]) -> GrowSpace | None:
		if _is_blank(fields.get("name")):
			logger.info("grow_space_rejected", reason="name is required")
			return None

		async with self._lock:
			try:
				space = GrowSpace(
					id=self._new_id(self._spaces),
					name=fields["name"],
					dimensions=fields.get("dimensions") or DEFAULT_TEXT,
					light_type=fields.get("light_type") or DEFAULT_TEXT,
					light_power=fields.get("light_power") or 0,
				)
			except ValidationError as exc:
				logger.info("grow_space_rejected", reason="invalid fields", errors=exc.error_count())
				return None
			self._spaces.append(space)
			await self._save(Collection.spaces)

		logger.info("grow_space_created", grow_space_id=space.id)
		return space

	async def update_grow_space(self, space_id: str, fields: Mapping[str, Any]) -> GrowSpace | None:
		async with self._lock:
			index = self._index_of(self._spaces, space_id)
			if index is None:
				return None
			updated = _merged(GrowSpace, self._spaces[index], self._changes(GrowSpace, fields))
			self._spaces[index] = updated
			await self._save(Collection.spaces)

		logger.info("grow_space_updated", grow_space_id=space_id)
		return updated

	async def delete_grow_space(self, space_id: str) -> bool:
		"""Remove a grow space. Plants that reference it are left untouched."""
		async with self._lock:
			index = self._index_of(self._spaces, space_id)
			if index is None:
				return False
			del self._spaces[index]
			await self._save(Collection.spaces)

		logger.info("grow_space_deleted", grow_space_id=space_id)
		return True

	# ── Plants ───────────────────────────────────────────────────────────────

	def list_plants(self, grow_space_id: str | None = None) -> list[Plant]:
		if grow_space_id is None:
			return list(self._plants)
		return [plant for plant in self._plants if _field(plant, "grow_space_id") == grow_space_id]

	def get_plant(self, plant_id: str) -> Plant | None:
		index = self._index_of(self._plants, plant_id)
		return None if index is None else self._plants[index]

	async def create_plant(self, fields: Mapping[str, Any]) -> Plant | None:
		"""Create a plant at the germination stage with an empty log history."""
		if _is_blank(fields.get("name")) or _is_blank(fields.get("grow_space_id")):
			logger.info("plant_rejected", reason="name and grow_space_id are required")
			return None

		async with self._lock:
			try:
				plant = Plant(
					id=self._new_id(self._plants),
					grow_space_id=fields["grow_space_id"],
					name=fields["name"],
					strain=fields.get("strain") or DEFAULT_STRAIN,
					genetics=fields.get("genetics") or Genetics.photoperiod,
					seed_bank=fields.get("seed_bank") or DEFAULT_TEXT,
					start_date=self.clock() if fields.get("start_date") is None else fields["start_date"],
					current_stage=GrowStage.germination,
					logs=[],
				)
			except ValidationError as exc:
				logger.info("plant_rejected", reason="invalid fields", errors=exc.error_count())
				return None
			self._plants.append(plant)
			await self._save(Collection.plants)

		logger.info("plant_created", plant_id=plant.id, grow_space_id=plant.grow_space_id)
		return plant

	async def update_plant(self, plant_id: str, fields: Mapping[str, Any]) -> Plant | None:
		"""Overwrite the supplied fields. Any stage may be set from any other stage."""
		async with self._lock:
			index = self._index_of(self._plants, plant_id)
			if index is None:
				return None
			updated = _merged(Plant, self._plants[index], self._changes(Plant, fields))
			self._plants[index] = updated
			await self._save(Collection.plants)

		logger.info("plant_updated", plant_id=plant_id)
		return updated

	async def delete_plant(self, plant_id: str) -> bool:
		async with self._lock:
			index = self._index_of(self._plants, plant_id)
			if index is None:
				return False
			del self._plants[index]
			await self._save(Collection.plants)

		logger.info("plant_deleted", plant_id=plant_id)
		return True

	async def append_log(self, plant_id: str, fields: Mapping[str, Any]) -> MaintenanceLog | None:
		"""Record a maintenance event against a plant, newest first."""
		if _is_blank(fields.get("type")):
			logger.info("log_rejected", plant_id=plant_id, reason="type is required")
			return None

		async with self._lock:
			index = self._index_of(self._plants, plant_id)
			if index is None:
				return None
			plant = self._plants[index]
			timestamp = self.clock()
			logs = _field(plant, "logs")
			if not isinstance(logs, list):
				logs = []
			head_date = _field(logs[0], "date") if logs else None
			if isinstance(head_date, int):
				# clock skew must not put the new entry behind the current head
				timestamp = max(timestamp, head_date)
			details = {
				name: value
				for name, value in fields.items()
				if name in MaintenanceLog.model_fields and name not in {"id", "date"} and value is not None
			}
			try:
				log = MaintenanceLog(
					id=self._new_id(logs),
					date=timestamp,
					**details,
				)
			except ValidationError as exc:
				logger.info("log_rejected", plant_id=plant_id, reason="invalid fields", errors=exc.error_count())
				return None
			self._plants[index] = _merged(Plant, plant, {"logs": [log, *logs]})
			await self._save(Collection.plants)

		logger.info("log_appended", plant_id=plant_id, log_id=log.id, log_type=log.type.value)
		return log

	# ── Derived values ──────────────────────────────────────────────────────

	def plant_age_days(self, plant: Plant) -> int:
		return plant_age_days(plant, self.clock())

	# ── Internals ───────────────────────────────────────────────────────────

	async def _load_collection(
		self,
		collection: Collection,
		model: type[Record],
		seed: list[Any],
	) -> list[Any]:
		raw_records = await self.store.load(collection)
		if raw_records is None:
			records = seed if self.seed_defaults else []
			logger.info("collection_initialized", collection=collection.value, records=len(records))
			return records
		logger.info("collection_loaded", collection=collection.value, records=len(raw_records))
		return parse_records(model, raw_records)

	async def _save(self, collection: Collection) -> bool:
		records = self._spaces if collection == Collection.spaces else self._plants
		return await self.store.save(
			collection,
			[record.to_record() if isinstance(record, Record) else record for record in records],
		)

	@staticmethod
	def _index_of(records: list[Any], record_id: str) -> int | None:
		for index, record in enumerate(records):
			if _field(record, "id") == record_id:
				return index
		return None

	@staticmethod
	def _new_id(records: Iterable[Any]) -> str:
		taken = {_field(record, "id") for record in records}
		while True:
			candidate = uuid.uuid4().hex[:_ID_LENGTH]
			if candidate not in taken:
				return candidate

	@staticmethod
	def _changes(model: type[Record], fields: Mapping[str, Any]) -> dict[str, Any]:
		# omitted and None-valued fields leave the stored value unchanged
		return {
			name: value
			for name, value in fields.items()
			if name in model.model_fields and name not in _PROTECTED_FIELDS and value is not None
		}
