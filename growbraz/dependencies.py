"""FastAPI dependencies resolving the process-wide service objects from app state."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from growbraz.services.advisor_service import Advisor
from growbraz.services.grow_service import GrowService


def get_grow_service(request: Request) -> GrowService:
	service = getattr(request.app.state, "grow_service", None)
	if service is None:
		raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="store not ready")
	return service


def get_advisor(request: Request) -> Advisor:
	advisor = getattr(request.app.state, "advisor", None)
	if advisor is None:
		raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="advisor not ready")
	return advisor
