from __future__ import annotations

from fastapi import Depends
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from categories_api import db
from categories_api.models import GLOBAL_USER_ID, Category, CategoryType
from categories_api.tables import CategoriesTable


class CategoriesDataAccess:
    def __init__(self, session: AsyncSession = Depends(db.get_session)) -> None:
        self._session = session

    async def create_category(
        self,
        *,
        user_id: str,
        name: str,
        category_type: str,
        icon_id: int,
        parent_id: str,
    ) -> Category:
        category = CategoriesTable(
            user_id=user_id,
            name=name,
            type=CategoryType.normalize(category_type).value,
            icon_id=icon_id if icon_id > 0 else 0,
            parent_id=parent_id,
            archived=False,
        )
        self._session.add(category)
        await self._session.flush()
        await self._session.refresh(category)
        return _to_category(category)

    async def get_category(self, category_id: str) -> Category | None:
        category = await self._session.get(CategoriesTable, category_id)
        if category is None:
            return None
        return _to_category(category)

    async def list_categories_for_user(self, user_id: str) -> list[Category]:
        result = await self._session.execute(
            select(CategoriesTable).where(
                or_(
                    CategoriesTable.user_id == GLOBAL_USER_ID,
                    CategoriesTable.user_id == user_id,
                )
            )
        )
        return [_to_category(category) for category in result.scalars()]

    async def list_children(self, category_id: str) -> list[Category]:
        result = await self._session.execute(
            select(CategoriesTable).where(CategoriesTable.parent_id == category_id)
        )
        return [_to_category(category) for category in result.scalars()]

    async def has_children(self, category_id: str) -> bool:
        result = await self._session.execute(
            select(CategoriesTable.id)
            .where(CategoriesTable.parent_id == category_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def update_category(
        self, category_id: str, updates: dict[str, object]
    ) -> Category | None:
        category = await self._session.get(CategoriesTable, category_id)
        if category is None:
            return None
        for field, value in updates.items():
            if field in ("id", "type", "user_id"):
                continue
            setattr(category, field, value)
        await self._session.flush()
        await self._session.refresh(category)
        return _to_category(category)

    async def delete_category(self, category: Category) -> Category | None:
        row = await self._session.get(CategoriesTable, category.id)
        if row is None:
            return None
        deleted = _to_category(row)
        await self._session.delete(row)
        await self._session.flush()
        return deleted

    async def delete_categories_for_user(self, user_id: str) -> int:
        result = await self._session.execute(
            delete(CategoriesTable).where(CategoriesTable.user_id == user_id)
        )
        await self._session.flush()
        return result.rowcount


def _to_category(category: CategoriesTable) -> Category:
    return Category(
        id=category.id,
        user_id=category.user_id,
        name=category.name,
        type=CategoryType(category.type),
        icon_id=category.icon_id,
        parent_id=category.parent_id,
        archived=category.archived,
    )
