"""Cultivation advice from an external text-generation API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from growbraz.config import Settings, get_settings
from growbraz.models.records import Plant, plant_age_days

logger = structlog.get_logger("growbraz.advisor")

OFFLINE_MESSAGE = "O assistente de IA está offline no momento. Por favor, verifique sua conexão."
EMPTY_ANSWER_MESSAGE = "Desculpe, não consegui processar o conselho agora."


@dataclass(frozen=True)
class PlantSnapshot:
	"""The subset of a plant the advisor is allowed to see."""

	name: str
	strain: str
	genetics: str
	stage: str
	age_days: int

	@classmethod
	def from_plant(cls, plant: Plant, now: int) -> PlantSnapshot:
		return cls(
			name=plant.name,
			strain=plant.strain,
			genetics=str(plant.genetics),
			stage=str(plant.current_stage),
			age_days=plant_age_days(plant, now),
		)


class Advisor(Protocol):
	async def get_advice(self, snapshot: PlantSnapshot, question: str) -> str: ...


def build_prompt(snapshot: PlantSnapshot, question: str) -> str:
	return (
		"Você é um master grower profissional com 30 anos de experiência no cultivo de cannabis.\n"
		"Analise o estado atual desta planta e responda à dúvida do usuário em Português do Brasil.\n"
		"\n"
		"Dados da Planta:\n"
		f"- Nome: {snapshot.name}\n"
		f"- Strain: {snapshot.strain}\n"
		f"- Genética: {snapshot.genetics}\n"
		f"- Estágio: {snapshot.stage}\n"
		f"- Idade: {snapshot.age_days} dias\n"
		"\n"
		f"Pergunta do Usuário: {question}\n"
		"\n"
		"Mantenha os conselhos concisos, científicos e práticos. "
		"Use um tom prestativo, porém profissional. Responda SEMPRE em Português do Brasil."
	)


class GeminiAdvisor:
	"""Single best-effort ``generateContent`` call per question.

	There is no retry, no cache and no client-side timeout. Every failure is
	logged and answered with a fixed fallback message.
	"""

	def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None):
		self.settings = settings or get_settings()
		self.transport = transport

	async def get_advice(self, snapshot: PlantSnapshot, question: str) -> str:
		if not self.settings.gemini_api_key:
			logger.warning("advisor_unconfigured")
			return OFFLINE_MESSAGE

		try:
			payload = await self.call_api(build_prompt(snapshot, question))
		except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
			logger.warning("advisor_call_failed", error=str(exc), plant=snapshot.name)
			return OFFLINE_MESSAGE

		text = self.extract_text(payload)
		if not text:
			logger.info("advisor_empty_answer", plant=snapshot.name)
			return EMPTY_ANSWER_MESSAGE
		return text

	async def call_api(self, prompt: str) -> Any:
		url = f"{self.settings.gemini_base_url}/models/{self.settings.gemini_model}:generateContent"
		headers = {
			"x-goog-api-key": self.settings.gemini_api_key,
			"content-type": "application/json",
		}
		body = {"contents": [{"parts": [{"text": prompt}]}]}

		async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
			response = await client.post(url, headers=headers, json=body)
			response.raise_for_status()
			return response.json()

	@staticmethod
	def extract_text(payload: Any) -> str:
		if not isinstance(payload, dict):
			return ""
		candidates = payload.get("candidates")
		if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
			return ""
		content = candidates[0].get("content")
		if not isinstance(content, dict):
			return ""
		parts = content.get("parts")
		if not isinstance(parts, list):
			return ""
		chunks = [str(part.get("text") or "") for part in parts if isinstance(part, dict)]
		return "".join(chunks).strip()
