"""Plant CRUD and maintenance-log routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from growbraz.dependencies import get_grow_service
from growbraz.middleware.logging import bind_record_context
from growbraz.models.records import MaintenanceLog, Plant, as_valid, stage_progress
from growbraz.schemas.plant import LogCreate, PlantCreate, PlantListRead, PlantRead, PlantUpdate
from growbraz.services.grow_service import GrowService

router = APIRouter(prefix="/plants", tags=["plants"], dependencies=[Depends(bind_record_context)])


def _not_found(plant_id: str) -> HTTPException:
	return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Plant {plant_id} not found")


def _to_plant_read(plant: Plant, service: GrowService) -> PlantRead | None:
	"""Attach the derived values, or ``None`` when the stored plant does not validate."""
	readable = as_valid(Plant, plant)
	if readable is None:
		return None
	return PlantRead(
		**readable.model_dump(),
		age_days=service.plant_age_days(readable),
		stage_progress=stage_progress(readable.current_stage),
	)


def _require_read(plant: Plant, plant_id: str, service: GrowService) -> PlantRead:
	read = _to_plant_read(plant, service)
	if read is None:
		raise HTTPException(
			status_code=status.HTTP_409_CONFLICT,
			detail=f"Plant {plant_id} has malformed stored data",
		)
	return read


@router.get("", response_model=PlantListRead)
async def list_plants(
	grow_space_id: str | None = Query(default=None, alias="growSpaceId"),
	service: GrowService = Depends(get_grow_service),
) -> PlantListRead:
	# entries that do not validate stay stored but are left out of the listing
	reads = (_to_plant_read(plant, service) for plant in service.list_plants(grow_space_id=grow_space_id))
	return PlantListRead(items=[read for read in reads if read is not None])


@router.post("", response_model=PlantRead, status_code=status.HTTP_201_CREATED)
async def create_plant(payload: PlantCreate, service: GrowService = Depends(get_grow_service)) -> PlantRead:
	plant = await service.create_plant(payload.model_dump(exclude_unset=True))
	if plant is None:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Plant rejected")
	return _require_read(plant, plant.id, service)


@router.get("/{plant_id}", response_model=PlantRead)
async def get_plant(plant_id: str, service: GrowService = Depends(get_grow_service)) -> PlantRead:
	plant = service.get_plant(plant_id)
	if plant is None:
		raise _not_found(plant_id)
	return _require_read(plant, plant_id, service)


@router.patch("/{plant_id}", response_model=PlantRead)
async def update_plant(
	plant_id: str,
	payload: PlantUpdate,
	service: GrowService = Depends(get_grow_service),
) -> PlantRead:
	plant = await service.update_plant(plant_id, payload.model_dump(exclude_unset=True))
	if plant is None:
		raise _not_found(plant_id)
	return _require_read(plant, plant_id, service)


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plant(plant_id: str, service: GrowService = Depends(get_grow_service)) -> Response:
	await service.delete_plant(plant_id)
	return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{plant_id}/logs", response_model=MaintenanceLog, status_code=status.HTTP_201_CREATED)
async def append_log(
	plant_id: str,
	payload: LogCreate,
	service: GrowService = Depends(get_grow_service),
) -> MaintenanceLog:
	if service.get_plant(plant_id) is None:
		raise _not_found(plant_id)
	log = await service.append_log(plant_id, payload.model_dump(exclude_unset=True))
	if log is None:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Log rejected")
	return log
