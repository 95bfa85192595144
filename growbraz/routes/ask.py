"""Advisory question route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from growbraz.dependencies import get_advisor, get_grow_service
from growbraz.middleware.logging import bind_record_context
from growbraz.models.records import Plant, as_valid
from growbraz.schemas.ask import AskRequest, AskResponse
from growbraz.services.advisor_service import Advisor, PlantSnapshot
from growbraz.services.grow_service import GrowService

router = APIRouter(prefix="/ask", tags=["ask"], dependencies=[Depends(bind_record_context)])


@router.post("/{plant_id}", response_model=AskResponse)
async def ask_about_plant(
	plant_id: str,
	payload: AskRequest,
	service: GrowService = Depends(get_grow_service),
	advisor: Advisor = Depends(get_advisor),
) -> AskResponse:
	plant = service.get_plant(plant_id)
	if plant is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Plant {plant_id} not found")

	readable = as_valid(Plant, plant)
	if readable is None:
		raise HTTPException(
			status_code=status.HTTP_409_CONFLICT,
			detail=f"Plant {plant_id} has malformed stored data",
		)

	snapshot = PlantSnapshot.from_plant(readable, service.clock())
	answer = await advisor.get_advice(snapshot, payload.question)
	return AskResponse(plant_id=plant_id, question=payload.question, answer=answer)
