# src/food_inventory/services/holding_service.py
from __future__ import annotations

from food_inventory.domain.exceptions import HoldingNotFoundError, ProductNotFoundError
from food_inventory.domain.models import (
    HOLDING_TYPES,
    Holding,
    HoldingCreate,
    HoldingUpdate,
    StorageLocation,
    User,
)
from food_inventory.repositories.base import (
    AbstractHoldingRepository,
    AbstractProductRepository,
    AbstractUserRepository,
)


class HoldingService:
    def __init__(
        self,
        holding_repositories: dict[StorageLocation, AbstractHoldingRepository],
        product_repository: AbstractProductRepository,
        user_repository: AbstractUserRepository,
    ) -> None:
        self._holdings = holding_repositories
        self._products = product_repository
        self._users = user_repository

    async def add_holding(
        self, user_email: str, location: StorageLocation, payload: HoldingCreate
    ) -> Holding:
        product = await self._products.find_by_barcode(payload.barcode)
        if product is None:
            raise ProductNotFoundError(payload.barcode)

        # Nutzer wird beim ersten Bestand registriert
        await self._users.save(User(email=user_email))

        holding = HOLDING_TYPES[location](
            user_email=user_email,
            product=product,
            quantity=payload.quantity,
            expiration_date=payload.expiration_date,
        )
        return await self._holdings[location].save(holding)

    async def list_holdings(self, user_email: str, location: StorageLocation) -> list[Holding]:
        return await self._holdings[location].find_by_user(user_email)

    async def update_holding(
        self,
        user_email: str,
        location: StorageLocation,
        holding_id: int,
        payload: HoldingUpdate,
    ) -> Holding:
        repo = self._holdings[location]
        holding = await repo.find_by_id(user_email, holding_id)
        if holding is None:
            raise HoldingNotFoundError(location, holding_id)
        updated = holding.model_copy(update=payload.model_dump(exclude_none=True))
        return await repo.update(updated)

    async def remove_holding(
        self, user_email: str, location: StorageLocation, holding_id: int
    ) -> None:
        if not await self._holdings[location].delete(user_email, holding_id):
            raise HoldingNotFoundError(location, holding_id)
