from app.menu.errors import MenuItemNotFoundError, MenuValidationError
from app.menu.models import Category, FieldError, MenuItem, MenuItemDraft
from app.menu.seed import seed_items
from app.menu.service import MenuService
from app.menu.store import MenuStore
from app.menu.validation import validate_menu_item

__all__ = [
    "Category",
    "FieldError",
    "MenuItem",
    "MenuItemDraft",
    "MenuItemNotFoundError",
    "MenuService",
    "MenuStore",
    "MenuValidationError",
    "seed_items",
    "validate_menu_item",
]
