from __future__ import annotations


class ServiceError(RuntimeError):
    status_code: int = 500
    error: str = "InternalServerError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
