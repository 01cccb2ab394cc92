# src/food_inventory/services/product_service.py
from __future__ import annotations

import logging

from food_inventory.core.metrics import PRODUCT_DELETIONS
from food_inventory.domain.exceptions import ProductAlreadyExistsError, ProductNotFoundError
from food_inventory.domain.models import Product, ProductCreate
from food_inventory.repositories.base import AbstractProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, product_repository: AbstractProductRepository) -> None:
        self._repo = product_repository

    async def create_product(self, payload: ProductCreate) -> Product:
        if await self._repo.find_by_barcode(payload.barcode) is not None:
            raise ProductAlreadyExistsError(payload.barcode)
        product = Product(
            barcode=payload.barcode,
            name=payload.name,
            expiration_date=payload.expiration_date,
            categories=list(payload.categories),
        )
        return await self._repo.save(product)

    async def get_product(self, barcode: str) -> Product:
        product = await self._repo.find_by_barcode(barcode)
        if product is None:
            raise ProductNotFoundError(barcode)
        return product

    async def list_products(self) -> list[Product]:
        return await self._repo.find_all()

    async def delete_product(self, barcode: str) -> None:
        """Löscht das Produkt samt aller Bestände, die darauf verweisen."""
        if not await self._repo.delete(barcode):
            raise ProductNotFoundError(barcode)
        PRODUCT_DELETIONS.inc()
        logger.info("Product %s deleted", barcode)
