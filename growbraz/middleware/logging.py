"""Structured logging: structlog setup, request timing and grow-record context.

Every log line emitted while a request is handled carries its ``request_id``;
requests addressed to a grow space or plant also carry ``space_id`` /
``plant_id`` so store writes and service events can be traced back to the
record that triggered them.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from growbraz.config import LogFormat, Settings, get_settings

RECORD_PATH_PARAMS = ("space_id", "plant_id")


def _renderer(settings: Settings) -> Any:
	if settings.log_format == LogFormat.console:
		return structlog.dev.ConsoleRenderer()
	return structlog.processors.JSONRenderer(ensure_ascii=False)


@lru_cache(maxsize=1)
def configure_structured_logging() -> None:
	"""Route stdlib and structlog output through one renderer (first call wins)."""
	settings = get_settings()
	log_level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
	logging.basicConfig(level=log_level, format="%(message)s")

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			_renderer(settings),
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)


def record_ids(path_params: Mapping[str, Any]) -> dict[str, str]:
	"""The grow-space / plant ids addressed by a request path."""
	return {name: str(path_params[name]) for name in RECORD_PATH_PARAMS if path_params.get(name)}


async def bind_record_context(request: Request) -> None:
	"""Router dependency: tag the rest of the request's log lines with the addressed record."""
	ids = record_ids(request.path_params)
	if ids:
		structlog.contextvars.bind_contextvars(**ids)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Attach request IDs and emit one timing line per API request."""

	quiet_paths = frozenset({"/health"})

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		if request.url.path in self.quiet_paths:
			return await call_next(request)

		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id
		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id)

		logger = structlog.get_logger("growbraz.request").bind(method=request.method, path=request.url.path)
		start = time.perf_counter()
		try:
			response = await call_next(request)
		except Exception:
			logger.exception("http_request_failed", duration_ms=_elapsed_ms(start), **record_ids(request.path_params))
			raise

		response.headers["x-request-id"] = request_id
		# path params are only known once the router has matched the request
		logger.info(
			"http_request",
			status_code=response.status_code,
			duration_ms=_elapsed_ms(start),
			**record_ids(request.path_params),
		)
		return response


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)
