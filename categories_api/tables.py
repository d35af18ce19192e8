from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


# -----------------------
# Categories
# -----------------------


class CategoriesTable(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)

    # "-1" marks a global (system-owned) category
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    # "Income" or "Expense", fixed at creation
    type: Mapped[str] = mapped_column(String(10), nullable=False, default="Expense")

    icon_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # "-1" marks a top-level category, so no foreign key here
    parent_id: Mapped[str] = mapped_column(String(36), nullable=False, default="-1")

    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_categories_user_id", "user_id"),
        Index("ix_categories_parent_id", "parent_id"),
    )


# -----------------------
# Dependent records
# -----------------------


class TransactionsTable(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    category_id: Mapped[str] = mapped_column(String(36), nullable=False)

    amount_minor: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_transactions_category_id", "category_id"),
        Index("ix_transactions_user_id", "user_id"),
    )
