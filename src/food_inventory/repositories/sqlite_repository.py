from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import (
    JSON,
    CursorResult,
    ForeignKey,
    Integer,
    Result,
    String,
    delete,
    event,
    select,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from food_inventory.domain.exceptions import HoldingNotFoundError, ProductAlreadyExistsError
from food_inventory.domain.models import HOLDING_TYPES, Holding, Product, StorageLocation, User
from food_inventory.repositories.base import (
    AbstractHoldingRepository,
    AbstractProductRepository,
    AbstractUserRepository,
)

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class ProductORM(Base):
    __tablename__ = "products"

    barcode: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # gg/mm/aa, unverändert gespeichert
    expiration_date: Mapped[str | None] = mapped_column(String, nullable=True)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    def to_domain(self) -> Product:
        return Product(
            barcode=self.barcode,
            name=self.name,
            expiration_date=self.expiration_date,
            categories=list(self.categories or []),
        )


class UserORM(Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String, primary_key=True)


class HoldingColumns:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_email: Mapped[str] = mapped_column(String, index=True, nullable=False)
    product_barcode: Mapped[str] = mapped_column(
        ForeignKey("products.barcode"), index=True, nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # jjjj-mm-tt, unverändert gespeichert
    expiration_date: Mapped[str] = mapped_column(String, nullable=False)


class FridgeHoldingORM(HoldingColumns, Base):
    __tablename__ = "fridge_holdings"


class PantryHoldingORM(HoldingColumns, Base):
    __tablename__ = "pantry_holdings"


HOLDING_TABLES: dict[StorageLocation, type[FridgeHoldingORM] | type[PantryHoldingORM]] = {
    StorageLocation.FRIDGE: FridgeHoldingORM,
    StorageLocation.PANTRY: PantryHoldingORM,
}


def _rowcount(result: Result[Any]) -> int:
    if isinstance(result, CursorResult):
        return int(result.rowcount)
    return 0


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite prüft Fremdschlüssel nur mit diesem Pragma, pro Verbindung
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SQLiteStorage:
    """Shared engine and session factory for all SQLite repositories."""

    def __init__(self, database_url: str) -> None:
        self.engine = create_async_engine(database_url)
        event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)
        self.async_session_maker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def initialize(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


class SQLiteHoldingRepository(AbstractHoldingRepository):
    def __init__(self, storage: SQLiteStorage, location: StorageLocation) -> None:
        self.location = location
        self._storage = storage
        self._table = HOLDING_TABLES[location]

    def _to_domain(self, row: HoldingColumns, product: ProductORM) -> Holding:
        return HOLDING_TYPES[self.location](
            id=row.id,
            user_email=row.user_email,
            product=product.to_domain(),
            quantity=row.quantity,
            expiration_date=row.expiration_date,
        )

    async def save(self, holding: Holding) -> Holding:
        async with self._storage.async_session_maker() as session, session.begin():
            orm_holding = self._table(
                user_email=holding.user_email,
                product_barcode=holding.product.barcode,
                quantity=holding.quantity,
                expiration_date=holding.expiration_date,
            )
            session.add(orm_holding)
            await session.flush()
            holding_id = orm_holding.id
        return HOLDING_TYPES[self.location].model_validate(
            holding.model_dump(exclude={"id", "location"}) | {"id": holding_id}
        )

    async def find_by_id(self, user_email: str, holding_id: int) -> Holding | None:
        table = self._table
        async with self._storage.async_session_maker() as session:
            result = await session.execute(
                select(table, ProductORM)
                .join(ProductORM, table.product_barcode == ProductORM.barcode)
                .where(table.id == holding_id, table.user_email == user_email)
            )
            row = result.one_or_none()
            if row:
                return self._to_domain(row[0], row[1])
            return None

    async def find_by_user(self, user_email: str) -> list[Holding]:
        table = self._table
        async with self._storage.async_session_maker() as session:
            result = await session.execute(
                select(table, ProductORM)
                .join(ProductORM, table.product_barcode == ProductORM.barcode)
                .where(table.user_email == user_email)
                .order_by(table.id)
            )
            return [self._to_domain(holding, product) for holding, product in result.all()]

    async def update(self, holding: Holding) -> Holding:
        table = self._table
        async with self._storage.async_session_maker() as session, session.begin():
            result = await session.execute(
                select(table).where(table.id == holding.id, table.user_email == holding.user_email)
            )
            orm_holding = result.scalar_one_or_none()
            if orm_holding is None:
                raise HoldingNotFoundError(self.location, holding.id or 0)
            orm_holding.quantity = holding.quantity
            orm_holding.expiration_date = holding.expiration_date
        return holding

    async def delete(self, user_email: str, holding_id: int) -> bool:
        table = self._table
        async with self._storage.async_session_maker() as session, session.begin():
            result = await session.execute(
                delete(table).where(table.id == holding_id, table.user_email == user_email)
            )
            return _rowcount(result) > 0

    async def delete_by_product(self, barcode: str) -> int:
        table = self._table
        async with self._storage.async_session_maker() as session, session.begin():
            result = await session.execute(delete(table).where(table.product_barcode == barcode))
            return _rowcount(result)


class SQLiteProductRepository(AbstractProductRepository):
    def __init__(self, storage: SQLiteStorage) -> None:
        self._storage = storage

    async def save(self, product: Product) -> Product:
        try:
            async with self._storage.async_session_maker() as session, session.begin():
                session.add(
                    ProductORM(
                        barcode=product.barcode,
                        name=product.name,
                        expiration_date=product.expiration_date,
                        categories=list(product.categories),
                    )
                )
        except IntegrityError as e:
            # Zwei gleichzeitige Anlagen desselben Barcodes: der Primärschlüssel entscheidet
            raise ProductAlreadyExistsError(product.barcode) from e
        return product

    async def find_by_barcode(self, barcode: str) -> Product | None:
        async with self._storage.async_session_maker() as session:
            orm_product = await session.get(ProductORM, barcode)
            if orm_product:
                return orm_product.to_domain()
            return None

    async def find_by_name_containing(self, fragment: str) -> list[Product]:
        async with self._storage.async_session_maker() as session:
            result = await session.execute(
                select(ProductORM).where(ProductORM.name.icontains(fragment, autoescape=True))
            )
            return [row.to_domain() for row in result.scalars()]

    async def find_all(self) -> list[Product]:
        async with self._storage.async_session_maker() as session:
            result = await session.execute(select(ProductORM))
            return [row.to_domain() for row in result.scalars()]

    async def delete(self, barcode: str) -> bool:
        # Eine Transaktion: Kühlschrank, Vorratsschrank, dann das Produkt.
        async with self._storage.async_session_maker() as session, session.begin():
            if await session.get(ProductORM, barcode) is None:
                return False
            fridge = await session.execute(
                delete(FridgeHoldingORM).where(FridgeHoldingORM.product_barcode == barcode)
            )
            pantry = await session.execute(
                delete(PantryHoldingORM).where(PantryHoldingORM.product_barcode == barcode)
            )
            await session.execute(delete(ProductORM).where(ProductORM.barcode == barcode))
        logger.debug(
            "Deleted product %s with %d fridge and %d pantry holdings",
            barcode,
            _rowcount(fridge),
            _rowcount(pantry),
        )
        return True


class SQLiteUserRepository(AbstractUserRepository):
    def __init__(self, storage: SQLiteStorage) -> None:
        self._storage = storage

    async def save(self, user: User) -> User:
        async with self._storage.async_session_maker() as session, session.begin():
            if await session.get(UserORM, user.email) is None:
                session.add(UserORM(email=user.email))
        return user

    async def find_by_email(self, email: str) -> User | None:
        async with self._storage.async_session_maker() as session:
            orm_user = await session.get(UserORM, email)
            if orm_user:
                return User(email=orm_user.email)
            return None
