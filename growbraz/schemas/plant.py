"""Pydantic request/response schemas for plants and their maintenance logs."""

from __future__ import annotations

from pydantic import Field

from growbraz.models.enums import Genetics, GrowStage, LogType, TrainingType
from growbraz.models.records import Plant
from growbraz.schemas.base import ApiModel


class PlantCreate(ApiModel):
	name: str = Field(min_length=1, max_length=255)
	grow_space_id: str = Field(min_length=1, max_length=64)
	strain: str | None = Field(default=None, max_length=255)
	genetics: Genetics | None = None
	seed_bank: str | None = Field(default=None, max_length=255)
	start_date: int | None = Field(default=None, ge=0)


class PlantUpdate(ApiModel):
	name: str | None = Field(default=None, min_length=1, max_length=255)
	grow_space_id: str | None = Field(default=None, min_length=1, max_length=64)
	strain: str | None = Field(default=None, max_length=255)
	genetics: Genetics | None = None
	seed_bank: str | None = Field(default=None, max_length=255)
	start_date: int | None = Field(default=None, ge=0)
	current_stage: GrowStage | None = None


class LogCreate(ApiModel):
	type: LogType
	ph: float | None = Field(default=None, ge=0, le=14)
	ec_ppm: float | None = Field(default=None, ge=0)
	volume_liters: float | None = Field(default=None, ge=0)
	nutrients: str | None = Field(default=None, max_length=500)
	training_types: list[TrainingType] | None = None
	notes: str | None = Field(default=None, max_length=2000)
	image_url: str | None = Field(default=None, max_length=2000)


class PlantRead(Plant):
	"""A stored plant plus the values derived from it at read time."""

	age_days: int
	stage_progress: int


class PlantListRead(ApiModel):
	items: list[PlantRead]
