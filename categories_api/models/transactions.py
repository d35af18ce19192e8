from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Transaction:
    id: str
    user_id: str
    category_id: str
    amount_minor: int
    notes: str | None
    created_at: datetime
