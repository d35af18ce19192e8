from __future__ import annotations

import dataclasses
import logging

from fastapi import Depends, status

from categories_api.config import CategoryServiceConfig, get_category_config
from categories_api.data_access import CategoriesDataAccess, TransactionsDataAccess
from categories_api.models import (
    NO_PARENT,
    UNSET,
    AddCategoryPayload,
    Category,
    CategoryPatch,
    CategoryRefPayload,
    CategoryType,
    DeleteUserPayload,
    EditCategoryPayload,
    OperationResult,
    ResponseKind,
    UserCategoriesPayload,
)
from categories_api.services.errors import (
    CategoryAuthorizationError,
    CategoryNotFoundError,
    CategoryValidationError,
)
from categories_api.services.validator import CategoryValidator

logger = logging.getLogger(__name__)


class CategoriesService:
    def __init__(
        self,
        categories_store: CategoriesDataAccess = Depends(),
        transactions_store: TransactionsDataAccess = Depends(),
        validator: CategoryValidator = Depends(),
        config: CategoryServiceConfig = Depends(get_category_config),
    ) -> None:
        self._categories_store = categories_store
        self._transactions_store = transactions_store
        self._validator = validator
        self._config = config

    def _fallback_category_id(self, category_type: CategoryType) -> str:
        if category_type is CategoryType.expense:
            return self._config.fallback_expense_category_id
        return self._config.fallback_income_category_id

    async def _require_owned_category(
        self, user_id: str, category_id: str, *, allow_global: bool = False
    ) -> Category | None:
        ownership = await self._validator.category_ownership(
            user_id, category_id, allow_global=allow_global
        )
        if not ownership.valid:
            raise CategoryAuthorizationError(ownership.errors)
        return ownership.category

    async def add_category(self, payload: AddCategoryPayload) -> OperationResult:
        logger.info("Adding category for user: %s", payload.user_id)

        errors: dict[str, object] = {}
        parent_validation = await self._validator.validate_parent(
            payload.parent_id, payload.user_id
        )
        errors.update(parent_validation.errors)
        name_validation = self._validator.validate_name(payload.name)
        errors.update(name_validation.errors)
        if errors:
            raise CategoryValidationError(errors)

        category = await self._categories_store.create_category(
            user_id=payload.user_id,
            name=name_validation.formatted,
            category_type=payload.type,
            icon_id=self._validator.set_icon_id(payload.icon_id),
            parent_id=payload.parent_id,
        )
        return OperationResult(ResponseKind.add, status.HTTP_200_OK, category)

    async def list_categories(self, payload: UserCategoriesPayload) -> OperationResult:
        logger.info("Get all categories for user: %s", payload.user_id)

        categories = await self._categories_store.list_categories_for_user(
            payload.user_id
        )
        return OperationResult(ResponseKind.get_all, status.HTTP_200_OK, categories)

    async def get_category(self, payload: CategoryRefPayload) -> OperationResult:
        logger.info("Get category: %s", payload.id)

        category = await self._require_owned_category(
            payload.user_id, payload.id, allow_global=True
        )
        return OperationResult(ResponseKind.get_category, status.HTTP_200_OK, category)

    async def _validate_patch(
        self, category: Category, patch: CategoryPatch, user_id: str
    ) -> tuple[CategoryPatch, dict[str, object]]:
        errors: dict[str, object] = {}

        if patch.archived is not UNSET and not isinstance(patch.archived, bool):
            errors["archived"] = "Archived must be boolean"

        if patch.parent_id is not UNSET and patch.parent_id != NO_PARENT:
            if patch.parent_id == category.id:
                errors["parent_id"] = "Category cannot be its own parent"
            elif await self._categories_store.has_children(category.id):
                errors["parent_id"] = "Categories only support one level of nesting"
            else:
                parent_validation = await self._validator.validate_parent(
                    patch.parent_id, user_id
                )
                errors.update(parent_validation.errors)

        if patch.name is not UNSET:
            name_validation = self._validator.validate_name(patch.name)
            errors.update(name_validation.errors)
            patch = dataclasses.replace(patch, name=name_validation.formatted)

        return patch, errors

    async def edit_category(self, payload: EditCategoryPayload) -> OperationResult:
        logger.info("Edit category: %s", payload.id)

        category = await self._require_owned_category(payload.user_id, payload.id)
        if category is None:
            raise CategoryNotFoundError()

        patch = CategoryPatch.diff(
            category,
            name=payload.name,
            parent_id=payload.parent_id,
            icon_id=(
                self._validator.set_icon_id(payload.icon_id)
                if payload.icon_id is not None
                else None
            ),
            archived=payload.archived,
        )
        patch, errors = await self._validate_patch(category, patch, payload.user_id)
        if errors:
            raise CategoryValidationError(errors)

        if patch.is_empty:
            return OperationResult(
                ResponseKind.edit_category, status.HTTP_204_NO_CONTENT, {}
            )

        updated_category = await self._categories_store.update_category(
            category.id, patch.as_updates()
        )
        if updated_category is None:
            raise CategoryNotFoundError()
        return OperationResult(
            ResponseKind.edit_category, status.HTTP_200_OK, updated_category
        )

    async def delete_category(self, payload: CategoryRefPayload) -> OperationResult:
        category = await self._require_owned_category(payload.user_id, payload.id)
        if category is None:
            raise CategoryAuthorizationError(
                {"category": "User does not own this category"}
            )

        if not category.archived:
            logger.info("Archiving category %s", category.id)
            archived_category = await self._categories_store.update_category(
                category.id, {"archived": True}
            )
            return OperationResult(
                ResponseKind.archived_category, status.HTTP_200_OK, archived_category
            )

        logger.info("Deleting category %s", category.id)
        deleted_category = await self._delete_cascade(category)
        return OperationResult(
            ResponseKind.delete_category, status.HTTP_200_OK, deleted_category
        )

    async def _delete_cascade(self, root: Category) -> Category:
        """Remove ``root`` and every category below it.

        Transactions of each removed category move to the fallback category
        for its type. Children are removed before their parent.
        """
        visited: set[str] = set()
        removal_order: list[Category] = []
        pending: list[Category] = [root]

        while pending:
            category = pending.pop()
            if category.id in visited:
                continue
            visited.add(category.id)
            removal_order.append(category)

            fallback_id = self._fallback_category_id(category.type)
            moved = await self._transactions_store.reassign_category(
                category.id, fallback_id
            )
            if moved:
                logger.debug(
                    "Moved %d transactions from %s to %s", moved, category.id, fallback_id
                )
            pending.extend(await self._categories_store.list_children(category.id))

        deleted_root: Category | None = None
        for category in reversed(removal_order):
            deleted = await self._categories_store.delete_category(category)
            if category.id == root.id:
                deleted_root = deleted

        return deleted_root if deleted_root is not None else root

    async def delete_user_categories(self, payload: DeleteUserPayload) -> OperationResult:
        logger.info("Deleting all categories for user: %s", payload.user_id)

        await self._categories_store.delete_categories_for_user(payload.user_id)
        return OperationResult(ResponseKind.delete_user, status.HTTP_200_OK, None)
