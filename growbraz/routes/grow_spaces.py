"""Grow space CRUD routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from growbraz.dependencies import get_grow_service
from growbraz.middleware.logging import bind_record_context
from growbraz.models.records import GrowSpace, as_valid
from growbraz.schemas.grow_space import GrowSpaceCreate, GrowSpaceListRead, GrowSpaceUpdate
from growbraz.services.grow_service import GrowService

router = APIRouter(prefix="/grow-spaces", tags=["grow-spaces"], dependencies=[Depends(bind_record_context)])


def _not_found(space_id: str) -> HTTPException:
	return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Grow space {space_id} not found")


def _to_space_read(space: GrowSpace, space_id: str) -> GrowSpace:
	readable = as_valid(GrowSpace, space)
	if readable is None:
		raise HTTPException(
			status_code=status.HTTP_409_CONFLICT,
			detail=f"Grow space {space_id} has malformed stored data",
		)
	return readable


@router.get("", response_model=GrowSpaceListRead)
async def list_grow_spaces(service: GrowService = Depends(get_grow_service)) -> GrowSpaceListRead:
	# entries that do not validate stay stored but are left out of the listing
	spaces = (as_valid(GrowSpace, space) for space in service.list_grow_spaces())
	return GrowSpaceListRead(items=[space for space in spaces if space is not None])


@router.post("", response_model=GrowSpace, status_code=status.HTTP_201_CREATED)
async def create_grow_space(
	payload: GrowSpaceCreate,
	service: GrowService = Depends(get_grow_service),
) -> GrowSpace:
	space = await service.create_grow_space(payload.model_dump(exclude_unset=True))
	if space is None:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Grow space rejected")
	return space


@router.get("/{space_id}", response_model=GrowSpace)
async def get_grow_space(space_id: str, service: GrowService = Depends(get_grow_service)) -> GrowSpace:
	space = service.get_grow_space(space_id)
	if space is None:
		raise _not_found(space_id)
	return _to_space_read(space, space_id)


@router.patch("/{space_id}", response_model=GrowSpace)
async def update_grow_space(
	space_id: str,
	payload: GrowSpaceUpdate,
	service: GrowService = Depends(get_grow_service),
) -> GrowSpace:
	space = await service.update_grow_space(space_id, payload.model_dump(exclude_unset=True))
	if space is None:
		raise _not_found(space_id)
	return _to_space_read(space, space_id)


@router.delete("/{space_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_grow_space(space_id: str, service: GrowService = Depends(get_grow_service)) -> Response:
	await service.delete_grow_space(space_id)
	return Response(status_code=status.HTTP_204_NO_CONTENT)
