# src/food_inventory/api/v1/holdings.py
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Security, status

from food_inventory.api.dependencies import get_holding_service
from food_inventory.core.security import get_user_email
from food_inventory.domain.exceptions import HoldingNotFoundError, ProductNotFoundError
from food_inventory.domain.models import Holding, HoldingCreate, HoldingUpdate, StorageLocation
from food_inventory.services.holding_service import HoldingService

router = APIRouter(prefix="/holdings", tags=["Holdings"])

UserDep = Annotated[str, Security(get_user_email)]
ServiceDep = Annotated[HoldingService, Depends(get_holding_service)]


@router.post("/{location}/", response_model=Holding, status_code=status.HTTP_201_CREATED)
async def add_holding(
    location: StorageLocation,
    payload: HoldingCreate,
    user_email: UserDep,
    service: ServiceDep,
) -> Holding:
    try:
        return await service.add_holding(user_email, location, payload)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{location}/", response_model=list[Holding])
async def list_holdings(
    location: StorageLocation, user_email: UserDep, service: ServiceDep
) -> list[Holding]:
    return await service.list_holdings(user_email, location)


@router.patch("/{location}/{holding_id}", response_model=Holding)
async def update_holding(
    location: StorageLocation,
    holding_id: int,
    payload: HoldingUpdate,
    user_email: UserDep,
    service: ServiceDep,
) -> Holding:
    try:
        return await service.update_holding(user_email, location, holding_id, payload)
    except HoldingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{location}/{holding_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_holding(
    location: StorageLocation,
    holding_id: int,
    user_email: UserDep,
    service: ServiceDep,
) -> None:
    try:
        await service.remove_holding(user_email, location, holding_id)
    except HoldingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
