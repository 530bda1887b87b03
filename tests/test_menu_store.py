from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from app.menu.errors import MenuItemNotFoundError
from app.menu.models import Category, MenuItem, MenuItemDraft
from app.menu.store import MenuStore, next_item_id
from app.menu.validation import validate_menu_item


def _draft(**overrides: object) -> MenuItemDraft:
    payload: dict[str, object] = {
        "name": "Veggie Wrap",
        "description": "Grilled vegetables wrapped in a flour tortilla",
        "price": 9.25,
        "category": "entree",
        "ingredients": ["tortilla", "peppers", "zucchini"],
    }
    payload.update(overrides)
    outcome = validate_menu_item(payload)
    assert outcome.draft is not None, outcome.errors
    return outcome.draft


def test_next_item_id_starts_at_one() -> None:
    assert next_item_id([]) == 1


def test_create_in_empty_store_assigns_id_one() -> None:
    store = MenuStore()

    item = store.create(_draft())

    assert item.id == 1
    assert item.available is True
    assert store.list_all() == [item]


def test_create_assigns_max_plus_one(store: MenuStore) -> None:
    before = store.list_all()

    item = store.create(_draft())

    assert item.id == max(existing.id for existing in before) + 1
    assert store.list_all()[:-1] == before


def test_ids_follow_the_surviving_maximum(store: MenuStore) -> None:
    store.delete(3)
    assert store.create(_draft()).id == 7

    store.delete(7)
    assert store.create(_draft()).id == 7


def test_create_then_get_round_trip(store: MenuStore) -> None:
    created = store.create(_draft(available=False))

    assert store.get(created.id) == created


def test_list_preserves_insertion_order(store: MenuStore) -> None:
    store.create(_draft(name="Alpha Bowl"))
    store.create(_draft(name="Beta Bowl"))

    names = [item.name for item in store.list_all()]

    assert names[-2:] == ["Alpha Bowl", "Beta Bowl"]
    assert [item.id for item in store.list_all()] == [1, 2, 3, 4, 5, 6, 7, 8]


def test_returned_items_are_copies(store: MenuStore) -> None:
    item = store.get(1)
    item.ingredients.append("pickles")
    item.name = "Changed"

    stored = store.get(1)
    assert stored.name == "Classic Burger"
    assert "pickles" not in stored.ingredients


@pytest.mark.parametrize("item_id", [0, -1, 9999])
def test_unknown_id_is_not_found(store: MenuStore, item_id: int) -> None:
    before = store.list_all()

    with pytest.raises(MenuItemNotFoundError) as excinfo:
        store.get(item_id)
    assert excinfo.value.item_id == item_id
    with pytest.raises(MenuItemNotFoundError):
        store.update(item_id, _draft())
    with pytest.raises(MenuItemNotFoundError):
        store.delete(item_id)

    assert store.list_all() == before


def test_update_replaces_fields_and_keeps_id(store: MenuStore) -> None:
    updated = store.update(2, _draft(price=10, category="appetizer", available=False))

    assert updated.id == 2
    assert updated.name == "Veggie Wrap"
    assert updated.price == 10.0
    assert updated.category == "appetizer"
    assert updated.available is False
    assert store.get(2) == updated
    assert [item.id for item in store.list_all()] == [1, 2, 3, 4, 5, 6]


def test_update_without_available_keeps_current_flag(store: MenuStore) -> None:
    updated = store.update(6, _draft())

    assert updated.available is False


def test_delete_removes_item_once(store: MenuStore) -> None:
    removed = store.delete(4)

    assert removed.name == "Chocolate Lava Cake"
    assert [item.id for item in store.list_all()] == [1, 2, 3, 5, 6]

    with pytest.raises(MenuItemNotFoundError):
        store.delete(4)
    assert len(store) == 5


def test_delete_returns_a_copy(store: MenuStore) -> None:
    stored = store._items[0]

    removed = store.delete(1)

    assert removed == stored
    assert removed is not stored
    assert removed.ingredients is not stored.ingredients


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "ab"},
        {"description": "too short"},
        {"price": 0},
        {"price": float("inf")},
        {"ingredients": []},
        {"category": "snack"},
        {"id": 0},
    ],
)
def test_menu_item_enforces_field_constraints(overrides: dict[str, object]) -> None:
    fields: dict[str, object] = {
        "id": 1,
        "name": "Soup",
        "description": "Soup of the day, ask your server",
        "price": 4.0,
        "category": "appetizer",
        "ingredients": ["water"],
    }
    fields.update(overrides)

    with pytest.raises(ValidationError):
        MenuItem(**fields)


def test_reset_revalidates_unchecked_items() -> None:
    item = MenuItem.model_construct(
        id=1,
        name="ab",
        description="Soup of the day, ask your server",
        price=4.0,
        category=Category.appetizer,
        ingredients=["water"],
        available=True,
    )

    with pytest.raises(ValidationError):
        MenuStore([item])


def test_reset_rejects_duplicate_ids() -> None:
    item = MenuItem(
        id=1,
        name="Soup",
        description="Soup of the day, ask your server",
        price=4.0,
        category="appetizer",
        ingredients=["water"],
    )

    with pytest.raises(ValueError, match="unique"):
        MenuStore([item, item])


def test_concurrent_creates_get_unique_sequential_ids() -> None:
    store = MenuStore()
    draft = _draft()
    created: list[int] = []
    created_lock = threading.Lock()

    def worker() -> None:
        for _ in range(25):
            item = store.create(draft)
            with created_lock:
                created.append(item.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(created) == list(range(1, 201))
    assert [item.id for item in store.list_all()] == list(range(1, 201))
