"""
In-memory menu item store.

The collection is held as an immutable tuple. Mutations build a new tuple
under a lock and publish it with a single assignment, so concurrent readers
always see either the collection before a mutation or after it. Items handed
out are copies; the only way to change stored state is through the store.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from app.menu.errors import MenuItemNotFoundError
from app.menu.models import MenuItem, MenuItemDraft


def next_item_id(items: Iterable[MenuItem]) -> int:
    return max((item.id for item in items), default=0) + 1


class MenuStore:
    def __init__(self, items: Iterable[MenuItem] | None = None) -> None:
        self._lock = threading.Lock()
        self._items: tuple[MenuItem, ...] = ()
        if items is not None:
            self.reset(items)

    def __len__(self) -> int:
        return len(self._items)

    def reset(self, items: Iterable[MenuItem]) -> None:
        snapshot = tuple(MenuItem.model_validate(item.model_dump()) for item in items)
        ids = [item.id for item in snapshot]
        if len(ids) != len(set(ids)):
            raise ValueError("Menu item ids must be unique")
        with self._lock:
            self._items = snapshot

    def list_all(self) -> list[MenuItem]:
        return [item.model_copy(deep=True) for item in self._items]

    def get(self, item_id: int) -> MenuItem:
        items = self._items
        return items[self._index_of(items, item_id)].model_copy(deep=True)

    def create(self, draft: MenuItemDraft) -> MenuItem:
        with self._lock:
            items = self._items
            item = MenuItem(id=next_item_id(items), **draft.model_dump())
            self._items = items + (item,)
        return item.model_copy(deep=True)

    def update(self, item_id: int, draft: MenuItemDraft) -> MenuItem:
        changes = draft.model_dump(exclude_unset=True)
        changes.pop("id", None)
        with self._lock:
            items = self._items
            index = self._index_of(items, item_id)
            updated = items[index].model_copy(update=changes)
            self._items = items[:index] + (updated,) + items[index + 1 :]
        return updated.model_copy(deep=True)

    def delete(self, item_id: int) -> MenuItem:
        with self._lock:
            items = self._items
            index = self._index_of(items, item_id)
            removed = items[index]
            self._items = items[:index] + items[index + 1 :]
        return removed.model_copy(deep=True)

    @staticmethod
    def _index_of(items: tuple[MenuItem, ...], item_id: int) -> int:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        raise MenuItemNotFoundError(item_id)
