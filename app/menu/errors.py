from __future__ import annotations

from collections.abc import Iterable

from app.core.errors import ServiceError
from app.menu.models import FieldError


class MenuValidationError(ServiceError):
    status_code = 400
    error = "ValidationError"

    def __init__(self, details: Iterable[FieldError]) -> None:
        super().__init__("Invalid request body")
        self.details = list(details)


class MenuItemNotFoundError(ServiceError):
    status_code = 404
    error = "NotFound"

    def __init__(self, item_id: int) -> None:
        super().__init__("Menu item not found")
        self.item_id = item_id
