from __future__ import annotations

from fastapi import status


class CategoryError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Unexpected error"

    def __init__(
        self, errors: dict[str, object] | None = None, message: str | None = None
    ) -> None:
        self.errors = errors or {}
        if message is not None:
            self.message = message
        super().__init__(self.message)


class CategoryValidationError(CategoryError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    message = "Invalid fields"


class CategoryAuthorizationError(CategoryError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Authentication Error"


class CategoryNotFoundError(CategoryError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Category not found"


class UnexpectedCategoryError(CategoryError):
    """Wraps a failure that is not a business error, keeping its diagnostic."""

    @classmethod
    def from_exception(cls, exc: BaseException) -> UnexpectedCategoryError:
        return cls({"exception": type(exc).__name__, "detail": str(exc)})
