from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from food_inventory.domain.models import Holding, Product, StorageLocation, User


class AbstractProductRepository(ABC):
    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Saves a new product. Raises ProductAlreadyExistsError if the barcode is taken."""
        ...

    @abstractmethod
    async def find_by_barcode(self, barcode: str) -> Product | None:
        """Finds a product by its barcode."""
        ...

    @abstractmethod
    async def find_by_name_containing(self, fragment: str) -> list[Product]:
        """Finds all products whose name contains the fragment, ignoring case."""
        ...

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Returns every stored product."""
        ...

    @abstractmethod
    async def delete(self, barcode: str) -> bool:
        """
        Deletes a product together with every holding that references it.

        Order: fridge holdings, pantry holdings, then the product itself.
        Either all three steps take effect or none does.
        Returns True if the product existed.
        """
        ...


class AbstractHoldingRepository(ABC):
    """Storage for the holdings of one location (fridge or pantry)."""

    location: StorageLocation

    @abstractmethod
    async def save(self, holding: Holding) -> Holding:
        """Saves a new holding and returns it with its assigned ID."""
        ...

    @abstractmethod
    async def find_by_id(self, user_email: str, holding_id: int) -> Holding | None:
        """Finds a holding by ID, scoped to its owner."""
        ...

    @abstractmethod
    async def find_by_user(self, user_email: str) -> list[Holding]:
        """Finds all holdings of a user in insertion order."""
        ...

    @abstractmethod
    async def update(self, holding: Holding) -> Holding:
        """Updates quantity and expiration date of an existing holding."""
        ...

    @abstractmethod
    async def delete(self, user_email: str, holding_id: int) -> bool:
        """Deletes a holding by ID and owner. Returns True if deleted."""
        ...

    @abstractmethod
    async def delete_by_product(self, barcode: str) -> int:
        """Deletes every holding referencing the product. Returns the count."""
        ...


class AbstractUserRepository(ABC):
    @abstractmethod
    async def save(self, user: User) -> User:
        """Saves a user, keeping an existing one with the same email."""
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Finds a user by email."""
        ...
