from __future__ import annotations

from typing import Any

import structlog

from app.menu.errors import MenuValidationError
from app.menu.models import MenuItem, MenuItemDraft
from app.menu.store import MenuStore
from app.menu.validation import validate_menu_item

logger = structlog.get_logger(__name__)


class MenuService:
    """Runs candidate payloads through validation before they reach the store.

    Reads go straight to the store. Writes are rejected with every failing
    field before the store is touched.
    """

    def __init__(self, store: MenuStore) -> None:
        self.store = store

    def list_items(self) -> list[MenuItem]:
        return self.store.list_all()

    def get_item(self, item_id: int) -> MenuItem:
        return self.store.get(item_id)

    def create_item(self, payload: Any) -> MenuItem:
        draft = self._validated(payload)
        item = self.store.create(draft)
        logger.info("menu_item_created", item_id=item.id)
        return item

    def update_item(self, item_id: int, payload: Any) -> MenuItem:
        draft = self._validated(payload)
        item = self.store.update(item_id, draft)
        logger.info("menu_item_updated", item_id=item.id)
        return item

    def delete_item(self, item_id: int) -> MenuItem:
        item = self.store.delete(item_id)
        logger.info("menu_item_deleted", item_id=item.id)
        return item

    @staticmethod
    def _validated(payload: Any) -> MenuItemDraft:
        outcome = validate_menu_item(payload)
        if outcome.draft is None:
            logger.info(
                "menu_item_rejected",
                fields=[error.field for error in outcome.errors],
            )
            raise MenuValidationError(outcome.errors)
        return outcome.draft
