from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Category(str, Enum):
    appetizer = "appetizer"
    entree = "entree"
    dessert = "dessert"
    beverage = "beverage"


ALLOWED_CATEGORIES: tuple[str, ...] = tuple(category.value for category in Category)


class MenuItemDraft(BaseModel):
    """A validated, normalized menu item that has not been assigned an id yet.

    ``available`` only counts as set when the client sent it, so updates can
    tell an omitted flag apart from an explicit ``true``.
    """

    name: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    category: Category
    ingredients: list[str] = Field(..., min_length=1)
    available: bool = True


class MenuItem(BaseModel):
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=3)
    description: str = Field(..., min_length=10)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    category: Category
    ingredients: list[str] = Field(..., min_length=1)
    available: bool = True


class FieldError(BaseModel):
    field: str
    message: str
