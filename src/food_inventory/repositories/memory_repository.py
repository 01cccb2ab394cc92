# src/food_inventory/repositories/memory_repository.py
from __future__ import annotations

import itertools
import logging

from food_inventory.domain.exceptions import HoldingNotFoundError, ProductAlreadyExistsError
from food_inventory.domain.models import HOLDING_TYPES, Holding, Product, StorageLocation, User
from food_inventory.repositories.base import (
    AbstractHoldingRepository,
    AbstractProductRepository,
    AbstractUserRepository,
)

logger = logging.getLogger(__name__)


class InMemoryHoldingRepository(AbstractHoldingRepository):
    """
    In-Memory Bestände eines Lagerorts.
    Reihenfolge der Rückgaben entspricht der Einfügereihenfolge.
    """

    def __init__(self, location: StorageLocation) -> None:
        self.location = location
        # Struktur: {holding_id: Holding}, dicts behalten die Einfügereihenfolge
        self._store: dict[int, Holding] = {}
        self._ids = itertools.count(1)

    async def save(self, holding: Holding) -> Holding:
        stored = HOLDING_TYPES[self.location].model_validate(
            holding.model_dump(exclude={"id", "location"}) | {"id": next(self._ids)}
        )
        self._store[stored.id] = stored  # type: ignore[index]
        return stored

    async def find_by_id(self, user_email: str, holding_id: int) -> Holding | None:
        holding = self._store.get(holding_id)
        if holding is None or holding.user_email != user_email:
            return None
        return holding

    async def find_by_user(self, user_email: str) -> list[Holding]:
        return [h for h in self._store.values() if h.user_email == user_email]

    async def update(self, holding: Holding) -> Holding:
        if holding.id is None or holding.id not in self._store:
            raise HoldingNotFoundError(self.location, holding.id or 0)
        self._store[holding.id] = holding
        return holding

    async def delete(self, user_email: str, holding_id: int) -> bool:
        if await self.find_by_id(user_email, holding_id) is None:
            return False
        del self._store[holding_id]
        return True

    async def delete_by_product(self, barcode: str) -> int:
        doomed = [hid for hid, h in self._store.items() if h.product.barcode == barcode]
        for hid in doomed:
            del self._store[hid]
        return len(doomed)


class InMemoryProductRepository(AbstractProductRepository):
    """
    In-Memory Produktkatalog. Produkte sind global, nicht pro Nutzer.
    Beim Löschen werden die Bestände der übergebenen Repositories mitgelöscht.
    """

    def __init__(
        self,
        fridge_repository: AbstractHoldingRepository,
        pantry_repository: AbstractHoldingRepository,
    ) -> None:
        self._products: dict[str, Product] = {}
        self._fridge = fridge_repository
        self._pantry = pantry_repository

    async def save(self, product: Product) -> Product:
        if product.barcode in self._products:
            raise ProductAlreadyExistsError(product.barcode)
        self._products[product.barcode] = product
        return product

    async def find_by_barcode(self, barcode: str) -> Product | None:
        return self._products.get(barcode)

    async def find_by_name_containing(self, fragment: str) -> list[Product]:
        fragment_lower = fragment.lower()
        return [p for p in self._products.values() if fragment_lower in p.name.lower()]

    async def find_all(self) -> list[Product]:
        return list(self._products.values())

    async def delete(self, barcode: str) -> bool:
        if barcode not in self._products:
            return False
        fridge_removed = await self._fridge.delete_by_product(barcode)
        pantry_removed = await self._pantry.delete_by_product(barcode)
        del self._products[barcode]
        logger.debug(
            "Deleted product %s with %d fridge and %d pantry holdings",
            barcode,
            fridge_removed,
            pantry_removed,
        )
        return True


class InMemoryUserRepository(AbstractUserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def save(self, user: User) -> User:
        return self._users.setdefault(user.email, user)

    async def find_by_email(self, email: str) -> User | None:
        return self._users.get(email)
