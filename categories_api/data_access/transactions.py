from __future__ import annotations

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from categories_api import db
from categories_api.models import Transaction
from categories_api.tables import TransactionsTable


class TransactionsDataAccess:
    def __init__(self, session: AsyncSession = Depends(db.get_session)) -> None:
        self._session = session

    async def create_transaction(
        self,
        *,
        user_id: str,
        category_id: str,
        amount_minor: int,
        notes: str | None = None,
    ) -> Transaction:
        transaction = TransactionsTable(
            user_id=user_id,
            category_id=category_id,
            amount_minor=amount_minor,
            notes=notes,
        )
        self._session.add(transaction)
        await self._session.flush()
        await self._session.refresh(transaction)
        return _to_transaction(transaction)

    async def list_transactions_by_category(self, category_id: str) -> list[Transaction]:
        result = await self._session.execute(
            select(TransactionsTable).where(TransactionsTable.category_id == category_id)
        )
        return [_to_transaction(transaction) for transaction in result.scalars()]

    async def reassign_category(self, from_category_id: str, to_category_id: str) -> int:
        result = await self._session.execute(
            update(TransactionsTable)
            .where(TransactionsTable.category_id == from_category_id)
            .values(category_id=to_category_id)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()
        return result.rowcount


def _to_transaction(transaction: TransactionsTable) -> Transaction:
    return Transaction(
        id=transaction.id,
        user_id=transaction.user_id,
        category_id=transaction.category_id,
        amount_minor=transaction.amount_minor,
        notes=transaction.notes,
        created_at=transaction.created_at,
    )
