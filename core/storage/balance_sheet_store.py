"""
BalanceSheetStore - manual balance sheet adjustments

Items entered by hand (e.g. a security deposit, an opening loan) that the
ledger does not capture. They are listed under their section next to the
system-computed lines.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.ledger.amounts import money, parse_amount
from core.ledger.errors import NotFoundError, ValidationError
from core.types import BalanceSheetCategory
from core.utils.timezone import from_storage, now_utc, to_storage

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass
class BalanceSheetItem:
    """Manual balance sheet line

    The amount may be negative (e.g. a contra entry).
    """

    id: str
    name: str
    category: str
    amount: Decimal
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "amount": money(self.amount),
            "notes": self.notes,
            "createdBy": self.created_by,
            "createdAt": to_storage(self.created_at) if self.created_at else None,
        }


def parse_item_amount(value: Any) -> Decimal:
    """Parse a manual item amount (any finite number, sign allowed)"""
    return parse_amount(value, positive=False)


class BalanceSheetStore:
    """Manual balance sheet item store

    Args:
        db: SQLite adapter
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def list_items(self) -> list[BalanceSheetItem]:
        """All manual items, oldest first"""
        rows = await self.db.fetchall(
            """
            SELECT id, name, category, amount, notes, created_by, created_at
            FROM balance_sheet_item ORDER BY created_at ASC, name ASC
            """
        )
        return [
            BalanceSheetItem(
                id=r[0],
                name=r[1],
                category=r[2],
                amount=Decimal(r[3]),
                notes=r[4],
                created_by=r[5],
                created_at=from_storage(r[6]) if r[6] else None,
            )
            for r in rows
        ]

    async def create(
        self,
        name: str | None,
        category: str | None,
        amount: Any,
        notes: str | None = None,
        created_by: str | None = None,
    ) -> BalanceSheetItem:
        """Validate and insert a manual item

        Raises:
            ValidationError: missing name, unknown category, invalid amount
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        try:
            category = BalanceSheetCategory(category).value
        except ValueError:
            valid = ", ".join(c.value for c in BalanceSheetCategory)
            raise ValidationError(
                f"Invalid category: {category}. Must be one of: {valid}"
            ) from None

        item = BalanceSheetItem(
            id=str(uuid.uuid4()),
            name=name,
            category=category,
            amount=parse_item_amount(amount),
            notes=notes,
            created_by=created_by,
            created_at=now_utc(),
        )
        await self.db.execute(
            """
            INSERT INTO balance_sheet_item
                (id, name, category, amount, notes, created_by, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                item.id,
                item.name,
                item.category,
                str(item.amount),
                item.notes,
                item.created_by,
                to_storage(item.created_at),
            ),
        )
        logger.info(f"Balance sheet item created: {item.name} ({item.category}) {item.amount}")
        return item

    async def delete(self, item_id: str | None) -> None:
        """Delete a manual item

        Raises:
            ValidationError: no id given
            NotFoundError: unknown id
        """
        if not item_id:
            raise ValidationError("ID required")
        cursor = await self.db.execute(
            "DELETE FROM balance_sheet_item WHERE id = ?",
            (item_id,),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Balance sheet item not found: {item_id}")
        logger.info(f"Balance sheet item deleted: {item_id}")
