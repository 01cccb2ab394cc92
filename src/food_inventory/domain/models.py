# src/food_inventory/domain/models.py
from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Boundary-Formate
# Produkt-Daten im Format gg/mm/aa, Bestände im ISO-Format jjjj-mm-tt.
# Beide Formate bleiben bewusst getrennt.
# ---------------------------------------------------------------------------

BARCODE_PATTERN = r"^[0-9]{1,8}$"
PRODUCT_NAME_PATTERN = r"^[a-zA-Z]{1,50}$"
PRODUCT_DATE_PATTERN = r"^(0[1-9]|[12][0-9]|3[01])/(0[1-9]|1[0-2])/\d{2}$"
HOLDING_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

NO_MATCHING_PRODUCT = "no matching product"


class StorageLocation(StrEnum):
    FRIDGE = "fridge"
    PANTRY = "pantry"


# ---------------------------------------------------------------------------
# Aggregate: Product
# ---------------------------------------------------------------------------


class Product(BaseModel):
    """
    Persistiertes Produkt, identifiziert über den Barcode.
    Gespeicherte Werte werden hier nicht erneut validiert, die Muster
    greifen an der API-Grenze (siehe ProductCreate).
    """

    barcode: str = Field(description="Primärschlüssel des Produkts")
    name: str
    expiration_date: str | None = Field(default=None, description="Format gg/mm/aa")
    categories: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class User(BaseModel):
    email: str = Field(min_length=1)

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Aggregate: Holding
# Ein Bestand: Nutzer X lagert Menge Y von Produkt Z an einem Ort.
# ---------------------------------------------------------------------------


class Holding(BaseModel):
    id: int | None = Field(default=None, description="Vom Storage vergeben, eindeutig je Ort")
    user_email: str
    product: Product
    quantity: int = Field(gt=0)
    expiration_date: str = Field(description="Format jjjj-mm-tt")
    location: StorageLocation


class FridgeHolding(Holding):
    location: Literal[StorageLocation.FRIDGE] = StorageLocation.FRIDGE


class PantryHolding(Holding):
    location: Literal[StorageLocation.PANTRY] = StorageLocation.PANTRY


HOLDING_TYPES: dict[StorageLocation, type[Holding]] = {
    StorageLocation.FRIDGE: FridgeHolding,
    StorageLocation.PANTRY: PantryHolding,
}


# ---------------------------------------------------------------------------
# Suchergebnis
# ---------------------------------------------------------------------------


class SearchResult(BaseModel):
    name: str
    barcode: str
    expiration_date: str
    quantity: int
    location: StorageLocation

    model_config = {"frozen": True}

    @classmethod
    def from_holding(cls, holding: Holding) -> SearchResult:
        """Baut ein Suchergebnis aus einem Bestand und seinem Produkt."""
        product = holding.product
        return cls(
            name=product.name,
            barcode=product.barcode,
            expiration_date=holding.expiration_date,
            quantity=holding.quantity,
            location=holding.location,
        )


class ProductSearchHits(BaseModel):
    results: list[SearchResult] = Field(default_factory=list)


class ProductSearchNotFound(BaseModel):
    name_fragment: str
    message: str = NO_MATCHING_PRODUCT


ProductSearchOutcome = ProductSearchHits | ProductSearchNotFound


# ---------------------------------------------------------------------------
# API Request Schemas
# ---------------------------------------------------------------------------


class ProductCreate(BaseModel):
    barcode: str = Field(
        pattern=BARCODE_PATTERN,
        description="Maximal 8 Zeichen, nur Ziffern",
    )
    name: str = Field(
        pattern=PRODUCT_NAME_PATTERN,
        description="Maximal 50 Zeichen, nur Buchstaben",
    )
    expiration_date: str = Field(pattern=PRODUCT_DATE_PATTERN, description="Format gg/mm/aa")
    categories: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class HoldingCreate(BaseModel):
    barcode: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    expiration_date: str = Field(pattern=HOLDING_DATE_PATTERN, description="Format jjjj-mm-tt")


class HoldingUpdate(BaseModel):
    quantity: int | None = Field(default=None, gt=0)
    expiration_date: str | None = Field(default=None, pattern=HOLDING_DATE_PATTERN)
