# src/food_inventory/services/search_service.py
from __future__ import annotations

import logging

from food_inventory.core.metrics import PRODUCT_SEARCHES
from food_inventory.domain.models import (
    ProductSearchHits,
    ProductSearchNotFound,
    ProductSearchOutcome,
    SearchResult,
    User,
)
from food_inventory.repositories.base import (
    AbstractHoldingRepository,
    AbstractProductRepository,
    AbstractUserRepository,
)

logger = logging.getLogger(__name__)


class ProductSearchService:
    """
    Produktsuche über Kühlschrank und Vorratsschrank eines Nutzers.
    Reine Lese-Operation, keine Zustandsänderung.
    """

    def __init__(
        self,
        product_repository: AbstractProductRepository,
        fridge_repository: AbstractHoldingRepository,
        pantry_repository: AbstractHoldingRepository,
        user_repository: AbstractUserRepository,
    ) -> None:
        self._products = product_repository
        self._fridge = fridge_repository
        self._pantry = pantry_repository
        self._users = user_repository

    async def search_by_name(self, user_email: str, name_fragment: str) -> ProductSearchOutcome:
        """
        Sucht Produkte, deren Name das Fragment enthält (ohne Groß-/Kleinschreibung),
        und liefert ein Ergebnis pro passendem Bestand des Nutzers.

        Reihenfolge: erst Vorratsschrank, dann Kühlschrank, jeweils in
        Storage-Reihenfolge. Keine Deduplizierung.

        Returns:
            ProductSearchNotFound: Wenn kein Produkt zum Fragment passt.
            ProductSearchHits: Sonst, auch leer wenn der Nutzer nichts davon lagert.

        Raises:
            ValueError: Bei leerer E-Mail, noch vor jedem Storage-Zugriff.
        """
        if not user_email:
            raise ValueError("user_email must not be empty")

        candidates = await self._products.find_by_name_containing(name_fragment)
        if not candidates:
            logger.info("No product matches '%s'", name_fragment)
            PRODUCT_SEARCHES.labels(outcome="not_found").inc()
            return ProductSearchNotFound(name_fragment=name_fragment)

        user = await self._resolve_user(user_email)
        pantry_holdings = await self._pantry.find_by_user(user.email)
        fridge_holdings = await self._fridge.find_by_user(user.email)

        candidate_barcodes = {p.barcode for p in candidates}
        results = [
            SearchResult.from_holding(h)
            for h in (*pantry_holdings, *fridge_holdings)
            if h.product.barcode in candidate_barcodes
        ]

        PRODUCT_SEARCHES.labels(outcome="hit" if results else "empty").inc()
        logger.debug(
            "Search '%s' for %s: %d candidates, %d results",
            name_fragment,
            user.email,
            len(candidates),
            len(results),
        )
        return ProductSearchHits(results=results)

    async def _resolve_user(self, user_email: str) -> User:
        user = await self._users.find_by_email(user_email)
        if user is None:
            # Unbekannte Nutzer haben keine Bestände, die Suche läuft trotzdem.
            logger.debug("User %s not registered, querying holdings unresolved", user_email)
            return User(email=user_email)
        return user
