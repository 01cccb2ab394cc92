# src/food_inventory/api/v1/router.py
from fastapi import APIRouter
from slowapi import Limiter

from food_inventory.api.v1 import holdings, products
from food_inventory.core.config import Settings


def build_api_router(limiter: Limiter, settings: Settings) -> APIRouter:
    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(products.build_search_router(limiter, settings.rate_limit))
    api_router.include_router(products.router)
    api_router.include_router(holdings.router)
    return api_router
