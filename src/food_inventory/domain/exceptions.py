# src/food_inventory/domain/exceptions.py
from food_inventory.domain.models import StorageLocation

# ---------------------------------------------------------------------------
# Custom Domain Exceptions
# ---------------------------------------------------------------------------


class ProductNotFoundError(Exception):
    def __init__(self, barcode: str):
        super().__init__(f"Product '{barcode}' not found")
        self.barcode = barcode


class ProductAlreadyExistsError(Exception):
    def __init__(self, barcode: str):
        super().__init__(f"Product '{barcode}' already exists")
        self.barcode = barcode


class HoldingNotFoundError(Exception):
    def __init__(self, location: StorageLocation, holding_id: int):
        super().__init__(f"Holding '{holding_id}' not found in {location.value}")
        self.location = location
        self.holding_id = holding_id
