"""Pydantic schemas for the /ask advisory endpoint."""

from __future__ import annotations

from pydantic import Field

from growbraz.schemas.base import ApiModel


class AskRequest(ApiModel):
	question: str = Field(min_length=1, max_length=2000)


class AskResponse(ApiModel):
	plant_id: str
	question: str
	answer: str
