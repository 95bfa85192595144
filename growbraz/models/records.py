"""Cultivation records: grow spaces, plants and their maintenance logs.

Attributes are snake_case in Python and camelCase on the wire; the store and
the HTTP API both use the camelCase aliases::

    {"id": "p1", "growSpaceId": "1", "name": "Glookies #1", "strain": "Glookies",
     "genetics": "Photoperiod", "seedBank": "Barney's Farm",
     "startDate": 1718000000000, "currentStage": "Vegetative", "logs": []}

Timestamps are epoch milliseconds.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from growbraz.models.enums import Genetics, GrowStage, LogType, TrainingType

MS_PER_DAY = 24 * 60 * 60 * 1000

STAGE_PROGRESS: dict[GrowStage, int] = {
    GrowStage.germination: 10,
    GrowStage.seedling: 25,
    GrowStage.vegetative: 50,
    GrowStage.flowering: 85,
    GrowStage.harvested: 100,
}

logger = structlog.get_logger("growbraz.models")

RecordT = TypeVar("RecordT", bound="Record")


def now_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


class Record(BaseModel):
    """Base for stored records, populated by field name or camelCase alias."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape (aliases, unset optionals omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GrowSpace(Record):
    name: str
    dimensions: str
    light_type: str
    light_power: int = Field(ge=0)


class MaintenanceLog(Record):
    date: int
    type: LogType
    ph: float | None = None
    ec_ppm: float | None = None
    volume_liters: float | None = None
    nutrients: str | None = None
    training_types: list[TrainingType] | None = None
    notes: str | None = None
    image_url: str | None = None


class Plant(Record):
    grow_space_id: str
    name: str
    strain: str
    genetics: Genetics
    seed_bank: str
    start_date: int
    current_stage: GrowStage
    logs: list[MaintenanceLog] = Field(default_factory=list)


def parse_records(model: type[RecordT], raw_records: list[Any]) -> list[RecordT | Any]:
    """Build records from stored JSON values.

    Well-formed entries are validated into typed models. Entries that fail
    validation stay in the list as the raw stored value, so they are written
    back unchanged and never dropped or repaired on read.
    """
    records: list[RecordT | Any] = []
    for raw in raw_records:
        try:
            records.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning(
                "record_loaded_unvalidated",
                record_type=model.__name__,
                errors=exc.error_count(),
            )
            records.append(raw)
    return records


def as_valid(model: type[RecordT], record: Any) -> RecordT | None:
    """Return ``record`` revalidated as ``model``, or ``None`` for raw or invalid entries."""
    if not isinstance(record, model):
        return None
    try:
        return model.model_validate(dict(record.__dict__))
    except ValidationError:
        return None


def plant_age_days(plant: Plant, now: int) -> int:
    """Whole days elapsed since ``plant.start_date`` (floored)."""
    return (now - plant.start_date) // MS_PER_DAY


def stage_progress(stage: GrowStage) -> int:
    """Visual progress percentage for a growth stage."""
    return STAGE_PROGRESS[GrowStage(stage)]
