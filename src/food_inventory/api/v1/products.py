from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Security, status
from slowapi import Limiter

from food_inventory.api.dependencies import get_product_service, get_search_service
from food_inventory.core.security import get_user_email
from food_inventory.domain.exceptions import ProductAlreadyExistsError, ProductNotFoundError
from food_inventory.domain.models import (
    Product,
    ProductCreate,
    ProductSearchNotFound,
    SearchResult,
)
from food_inventory.services.product_service import ProductService
from food_inventory.services.search_service import ProductSearchService

router = APIRouter(prefix="/products", tags=["Products"])

UserDep = Annotated[str, Security(get_user_email)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
SearchServiceDep = Annotated[ProductSearchService, Depends(get_search_service)]


async def search_products(
    request: Request,
    user_email: UserDep,
    service: SearchServiceDep,
    q: str = "",
) -> list[SearchResult]:
    """
    Sucht Produkte nach Namensfragment und liefert die passenden Bestände
    des Nutzers aus Vorratsschrank und Kühlschrank.
    """
    outcome = await service.search_by_name(user_email, q)
    if isinstance(outcome, ProductSearchNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.message)
    return outcome.results


def build_search_router(limiter: Limiter, rate_limit: str) -> APIRouter:
    """
    Eigener Router pro App, damit das Limit aus den Settings dieser App greift.
    Muss vor `router` eingebunden werden, sonst matcht `/{barcode}` zuerst.
    """
    search_router = APIRouter(prefix="/products", tags=["Products"])
    search_router.add_api_route(
        "/search",
        limiter.limit(rate_limit)(search_products),
        methods=["GET"],
        response_model=list[SearchResult],
    )
    return search_router


@router.get("/", response_model=list[Product])
async def list_products(user_email: UserDep, service: ProductServiceDep) -> list[Product]:
    return await service.list_products()


@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    user_email: UserDep,
    service: ProductServiceDep,
    payload: ProductCreate,
) -> Product:
    try:
        return await service.create_product(payload)
    except ProductAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/{barcode}", response_model=Product)
async def get_product(user_email: UserDep, service: ProductServiceDep, barcode: str) -> Product:
    try:
        return await service.get_product(barcode)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{barcode}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(user_email: UserDep, service: ProductServiceDep, barcode: str) -> None:
    """
    Löscht ein Produkt. Alle Bestände, die darauf verweisen, werden mitgelöscht.
    """
    try:
        await service.delete_product(barcode)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
