"""Pydantic request/response schemas for grow spaces."""

from __future__ import annotations

from pydantic import Field

from growbraz.models.records import GrowSpace
from growbraz.schemas.base import ApiModel


class GrowSpaceCreate(ApiModel):
	name: str = Field(min_length=1, max_length=255)
	dimensions: str | None = Field(default=None, max_length=100)
	light_type: str | None = Field(default=None, max_length=100)
	light_power: int | None = Field(default=None, ge=0)


class GrowSpaceUpdate(ApiModel):
	name: str | None = Field(default=None, min_length=1, max_length=255)
	dimensions: str | None = Field(default=None, max_length=100)
	light_type: str | None = Field(default=None, max_length=100)
	light_power: int | None = Field(default=None, ge=0)


class GrowSpaceListRead(ApiModel):
	items: list[GrowSpace]
