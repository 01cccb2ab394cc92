# src/food_inventory/api/dependencies.py
from fastapi import Depends, Request

from food_inventory.repositories.factory import Repositories
from food_inventory.services.holding_service import HoldingService
from food_inventory.services.product_service import ProductService
from food_inventory.services.search_service import ProductSearchService


def get_repositories(request: Request) -> Repositories:
    """Liefert die beim Start erzeugten Repositories (app.state, siehe lifespan)."""
    repositories: Repositories = request.app.state.repositories
    return repositories


def get_search_service(
    repositories: Repositories = Depends(get_repositories),
) -> ProductSearchService:
    return ProductSearchService(
        product_repository=repositories.products,
        fridge_repository=repositories.fridge,
        pantry_repository=repositories.pantry,
        user_repository=repositories.users,
    )


def get_product_service(
    repositories: Repositories = Depends(get_repositories),
) -> ProductService:
    return ProductService(product_repository=repositories.products)


def get_holding_service(
    repositories: Repositories = Depends(get_repositories),
) -> HoldingService:
    return HoldingService(
        holding_repositories=repositories.holdings,
        product_repository=repositories.products,
        user_repository=repositories.users,
    )
