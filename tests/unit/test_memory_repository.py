# tests/unit/test_memory_repository.py
import pytest

from food_inventory.domain.exceptions import HoldingNotFoundError, ProductAlreadyExistsError
from food_inventory.domain.models import FridgeHolding, PantryHolding, Product, User
from food_inventory.repositories.factory import Repositories, build_memory_repositories


@pytest.fixture
def repos() -> Repositories:
    return build_memory_repositories()


def _fridge(product: Product, quantity: int = 1, user_email: str = "alice") -> FridgeHolding:
    return FridgeHolding(
        user_email=user_email, product=product, quantity=quantity, expiration_date="2024-05-20"
    )


def _pantry(product: Product, quantity: int = 1, user_email: str = "alice") -> PantryHolding:
    return PantryHolding(
        user_email=user_email, product=product, quantity=quantity, expiration_date="2024-05-20"
    )


@pytest.mark.asyncio  # type: ignore[misc]
async def test_find_by_name_containing_ignores_case(repos: Repositories) -> None:
    await repos.products.save(Product(barcode="1", name="Pasta"))
    await repos.products.save(Product(barcode="2", name="Milk"))

    found = await repos.products.find_by_name_containing("ASTA")
    assert [p.barcode for p in found] == ["1"]
    assert len(await repos.products.find_by_name_containing("")) == 2


@pytest.mark.asyncio  # type: ignore[misc]
async def test_save_assigns_ids_per_location(repos: Repositories) -> None:
    product = Product(barcode="1", name="Pasta")
    first = await repos.fridge.save(_fridge(product))
    second = await repos.fridge.save(_fridge(product))
    in_pantry = await repos.pantry.save(_pantry(product))

    assert (first.id, second.id) == (1, 2)
    assert in_pantry.id == 1


@pytest.mark.asyncio  # type: ignore[misc]
async def test_find_by_user_keeps_insertion_order(repos: Repositories) -> None:
    product = Product(barcode="1", name="Pasta")
    await repos.pantry.save(_pantry(product, quantity=3))
    await repos.pantry.save(_pantry(product, quantity=1, user_email="bob"))
    await repos.pantry.save(_pantry(product, quantity=2))

    holdings = await repos.pantry.find_by_user("alice")
    assert [h.quantity for h in holdings] == [3, 2]


@pytest.mark.asyncio  # type: ignore[misc]
async def test_find_by_id_is_scoped_to_owner(repos: Repositories) -> None:
    saved = await repos.fridge.save(_fridge(Product(barcode="1", name="Pasta")))
    assert saved.id is not None

    assert await repos.fridge.find_by_id("alice", saved.id) == saved
    assert await repos.fridge.find_by_id("bob", saved.id) is None
    assert await repos.fridge.delete("bob", saved.id) is False


@pytest.mark.asyncio  # type: ignore[misc]
async def test_update_missing_holding_raises(repos: Repositories) -> None:
    ghost = _fridge(Product(barcode="1", name="Pasta")).model_copy(update={"id": 99})
    with pytest.raises(HoldingNotFoundError):
        await repos.fridge.update(ghost)


@pytest.mark.asyncio  # type: ignore[misc]
async def test_delete_product_cascades_to_both_locations(repos: Repositories) -> None:
    pasta = Product(barcode="1", name="Pasta")
    milk = Product(barcode="2", name="Milk")
    await repos.products.save(pasta)
    await repos.products.save(milk)
    await repos.fridge.save(_fridge(pasta))
    await repos.fridge.save(_fridge(milk))
    await repos.pantry.save(_pantry(pasta))

    assert await repos.products.delete("1") is True

    assert await repos.products.find_by_barcode("1") is None
    assert [h.product.barcode for h in await repos.fridge.find_by_user("alice")] == ["2"]
    assert await repos.pantry.find_by_user("alice") == []


@pytest.mark.asyncio  # type: ignore[misc]
async def test_save_duplicate_barcode_raises(repos: Repositories) -> None:
    await repos.products.save(Product(barcode="1", name="Pasta"))

    with pytest.raises(ProductAlreadyExistsError):
        await repos.products.save(Product(barcode="1", name="Penne"))

    assert (await repos.products.find_by_barcode("1")) == Product(barcode="1", name="Pasta")


@pytest.mark.asyncio  # type: ignore[misc]
async def test_delete_unknown_product(repos: Repositories) -> None:
    assert await repos.products.delete("404") is False


@pytest.mark.asyncio  # type: ignore[misc]
async def test_user_save_keeps_existing(repos: Repositories) -> None:
    first = await repos.users.save(User(email="alice@example.com"))
    again = await repos.users.save(User(email="alice@example.com"))
    assert first is again
    assert await repos.users.find_by_email("bob@example.com") is None
