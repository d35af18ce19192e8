from __future__ import annotations

import re
from dataclasses import dataclass, field

from fastapi import Depends

from categories_api.data_access import CategoriesDataAccess
from categories_api.models import GLOBAL_USER_ID, NO_PARENT, Category

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(slots=True)
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class NameValidation(ValidationResult):
    formatted: str = ""


@dataclass(slots=True)
class OwnershipValidation(ValidationResult):
    category: Category | None = None


def validate_name(name: str) -> NameValidation:
    formatted = name.strip()
    result = NameValidation(formatted=formatted)
    if not formatted:
        result.errors["name"] = "Category name can't be empty"
    return result


def set_icon_id(icon_id: object) -> int:
    """Coerce an icon id to a non-negative integer, 0 when it can't be read.

    Icons live in the frontend, so any leading integer is accepted as-is.
    """
    match = _LEADING_INT.match(str(icon_id))
    if match is None:
        return 0
    value = int(match.group(1))
    return value if value >= 0 else 0


class CategoryValidator:
    def __init__(self, categories_store: CategoriesDataAccess = Depends()) -> None:
        self._categories_store = categories_store

    validate_name = staticmethod(validate_name)
    set_icon_id = staticmethod(set_icon_id)

    async def validate_parent(self, parent_id: str, user_id: str) -> ValidationResult:
        result = ValidationResult()
        if parent_id == NO_PARENT:
            return result

        parent = await self._categories_store.get_category(parent_id)
        if parent is None:
            result.errors["parent_id"] = "Parent category doesn't exist"
            return result

        if parent.has_parent:
            result.errors["parent_id"] = "Categories only support one level of nesting"

        if parent.user_id not in (GLOBAL_USER_ID, user_id):
            result.errors["parent_id"] = "User does not own parent category"

        return result

    async def category_ownership(
        self, user_id: str, category_id: str, *, allow_global: bool = False
    ) -> OwnershipValidation:
        category = await self._categories_store.get_category(category_id)
        result = OwnershipValidation(category=category)

        owns = category is not None and (
            category.user_id == user_id or (allow_global and category.is_global)
        )
        if not user_id or not owns:
            result.errors["category"] = "User does not own this category"

        return result
