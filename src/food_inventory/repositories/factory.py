"""Builds the repository set for the configured storage backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from food_inventory.core.config import Settings
from food_inventory.domain.models import StorageLocation
from food_inventory.repositories.base import (
    AbstractHoldingRepository,
    AbstractProductRepository,
    AbstractUserRepository,
)
from food_inventory.repositories.memory_repository import (
    InMemoryHoldingRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from food_inventory.repositories.sqlite_repository import (
    SQLiteHoldingRepository,
    SQLiteProductRepository,
    SQLiteStorage,
    SQLiteUserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Holds the storage collaborators shared by all services."""

    products: AbstractProductRepository
    holdings: dict[StorageLocation, AbstractHoldingRepository]
    users: AbstractUserRepository
    storage: SQLiteStorage | None = None

    @property
    def fridge(self) -> AbstractHoldingRepository:
        return self.holdings[StorageLocation.FRIDGE]

    @property
    def pantry(self) -> AbstractHoldingRepository:
        return self.holdings[StorageLocation.PANTRY]

    async def close(self) -> None:
        if self.storage is not None:
            await self.storage.dispose()


def build_memory_repositories() -> Repositories:
    fridge = InMemoryHoldingRepository(StorageLocation.FRIDGE)
    pantry = InMemoryHoldingRepository(StorageLocation.PANTRY)
    return Repositories(
        products=InMemoryProductRepository(fridge_repository=fridge, pantry_repository=pantry),
        holdings={StorageLocation.FRIDGE: fridge, StorageLocation.PANTRY: pantry},
        users=InMemoryUserRepository(),
    )


async def build_sqlite_repositories(database_url: str) -> Repositories:
    storage = SQLiteStorage(database_url)
    await storage.initialize()
    return Repositories(
        products=SQLiteProductRepository(storage),
        holdings={
            location: SQLiteHoldingRepository(storage, location) for location in StorageLocation
        },
        users=SQLiteUserRepository(storage),
        storage=storage,
    )


async def build_repositories(settings: Settings) -> Repositories:
    logger.info("Using %s storage backend", settings.storage_backend)
    if settings.storage_backend == "memory":
        return build_memory_repositories()
    return await build_sqlite_repositories(settings.database_url)
