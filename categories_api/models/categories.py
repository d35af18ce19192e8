from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

GLOBAL_USER_ID = "-1"
NO_PARENT = "-1"


class CategoryType(str, Enum):
    income = "Income"
    expense = "Expense"

    @classmethod
    def normalize(cls, raw_type: object) -> CategoryType:
        if isinstance(raw_type, str) and raw_type.strip().lower() == "income":
            return cls.income
        return cls.expense


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    user_id: str
    name: str
    type: CategoryType
    icon_id: int
    parent_id: str
    archived: bool

    @property
    def is_global(self) -> bool:
        return self.user_id == GLOBAL_USER_ID

    @property
    def has_parent(self) -> bool:
        return self.parent_id != NO_PARENT


class CategoryResponse(BaseModel):
    id: str
    user_id: str
    name: str
    type: CategoryType
    icon_id: int
    parent_id: str
    archived: bool


class AddCategoryPayload(BaseModel):
    user_id: str = Field(..., min_length=1)
    name: str = ""
    type: str = ""
    icon_id: Any = 0
    parent_id: str = NO_PARENT


class UserCategoriesPayload(BaseModel):
    user_id: str = ""


class CategoryRefPayload(BaseModel):
    user_id: str = ""
    id: str = Field("", validation_alias=AliasChoices("id", "_id"))


class EditCategoryPayload(CategoryRefPayload):
    # Loosely typed so the service can report field errors itself;
    # a "type" key is ignored like any other unknown key.
    name: str | None = None
    parent_id: str | None = None
    icon_id: Any = None
    archived: Any = None


class DeleteUserPayload(BaseModel):
    user_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("user_id", "_id")
    )


class _Unset:
    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True, slots=True)
class CategoryPatch:
    """Fields of an edit request that differ from the stored category.

    A field left as ``UNSET`` was either absent from the request or equal to
    the stored value. ``type`` has no slot here, so it can never be patched.
    """

    name: Any = UNSET
    parent_id: Any = UNSET
    icon_id: Any = UNSET
    archived: Any = UNSET

    @classmethod
    def diff(
        cls,
        current: Category,
        *,
        name: str | None = None,
        parent_id: str | None = None,
        icon_id: int | None = None,
        archived: object = None,
    ) -> CategoryPatch:
        return cls(
            name=name if name is not None and name != current.name else UNSET,
            parent_id=(
                parent_id if parent_id and parent_id != current.parent_id else UNSET
            ),
            icon_id=(
                icon_id if icon_id is not None and icon_id != current.icon_id else UNSET
            ),
            archived=(
                archived
                if archived is not None and archived != current.archived
                else UNSET
            ),
        )

    def as_updates(self) -> dict[str, object]:
        updates: dict[str, object] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not UNSET:
                updates[field.name] = value
        return updates

    @property
    def is_empty(self) -> bool:
        return not self.as_updates()
