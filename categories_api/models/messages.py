from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    add = "add"
    get_all = "get-all"
    get_category = "get-Category"
    edit_category = "edit-Category"
    delete_category = "delete-Category"
    delete_user = "delete-User"


class ResponseKind(str, Enum):
    add = "add"
    get_all = "get-all"
    get_category = "get-Category"
    edit_category = "edit-Category"
    archived_category = "archived-Category"
    delete_category = "delete-Category"
    delete_user = "delete-User"
    error = "error"


@dataclass(frozen=True, slots=True)
class OperationResult:
    kind: ResponseKind
    status: int
    payload: object = None


class InboundMessage(BaseModel):
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)


class OutboundMessage(BaseModel):
    type: ResponseKind
    status: int | None
    payload: Any = None
    error: str | None = None
