"""Routes inbound category messages to the service and builds the replies.

Every inbound message produces exactly one outbound message: business errors
keep their status code, anything else becomes a 500 carrying the diagnostic.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from categories_api import db
from categories_api.models import (
    AddCategoryPayload,
    Category,
    CategoryRefPayload,
    CategoryResponse,
    DeleteUserPayload,
    EditCategoryPayload,
    InboundMessage,
    MessageType,
    OperationResult,
    OutboundMessage,
    ResponseKind,
    UserCategoriesPayload,
)
from categories_api.services import (
    CategoriesService,
    CategoryError,
    CategoryValidationError,
    UnexpectedCategoryError,
)

logger = logging.getLogger(__name__)

Handler = Callable[[BaseModel], Awaitable[OperationResult]]


def _field_errors(exc: ValidationError) -> dict[str, object]:
    errors: dict[str, object] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "payload"
        errors[field] = error["msg"]
    return errors


def _serialize(payload: object) -> object:
    if isinstance(payload, Category):
        return CategoryResponse.model_validate(payload, from_attributes=True).model_dump(
            mode="json"
        )
    if isinstance(payload, list):
        return [_serialize(item) for item in payload]
    return payload


def _error_message(error: CategoryError) -> OutboundMessage:
    return OutboundMessage(
        type=ResponseKind.error,
        status=error.status_code,
        payload=error.errors,
        error=error.message,
    )


class MessageProcessor:
    def __init__(
        self,
        categories_service: CategoriesService = Depends(),
        session: AsyncSession = Depends(db.get_session),
    ) -> None:
        self._session = session
        self._handlers: dict[MessageType, tuple[type[BaseModel], Handler]] = {
            MessageType.add: (AddCategoryPayload, categories_service.add_category),
            MessageType.get_all: (
                UserCategoriesPayload,
                categories_service.list_categories,
            ),
            MessageType.get_category: (
                CategoryRefPayload,
                categories_service.get_category,
            ),
            MessageType.edit_category: (
                EditCategoryPayload,
                categories_service.edit_category,
            ),
            MessageType.delete_category: (
                CategoryRefPayload,
                categories_service.delete_category,
            ),
            MessageType.delete_user: (
                DeleteUserPayload,
                categories_service.delete_user_categories,
            ),
        }

    async def process(self, message: InboundMessage) -> OutboundMessage:
        try:
            message_type = MessageType(message.type)
        except ValueError:
            logger.debug("Unsupported function type: %s", message.type)
            return OutboundMessage(
                type=ResponseKind.error,
                status=None,
                error=f"Unsupported function type: {message.type}",
            )

        payload_model, handler = self._handlers[message_type]
        try:
            payload = payload_model.model_validate(message.payload)
            result = await handler(payload)
            await self._session.commit()
        except ValidationError as exc:
            return _error_message(CategoryValidationError(_field_errors(exc)))
        except CategoryError as exc:
            logger.info("%s rejected with %d: %s", message.type, exc.status_code, exc.errors)
            return _error_message(exc)
        except Exception as exc:
            logger.exception("Unexpected error while processing %s", message.type)
            await self._session.rollback()
            return _error_message(UnexpectedCategoryError.from_exception(exc))

        return OutboundMessage(
            type=result.kind,
            status=result.status,
            payload=_serialize(result.payload),
        )
