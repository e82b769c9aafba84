"""
P&L service

Resolves the statement period in IST and builds the Profit & Loss
statement from the entries inside it.
"""

from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.calendar import (
    ALL,
    DateWindow,
    fiscal_year_window,
    month_window,
    year_of,
    year_window,
)
from core.ledger.categories import CategoryRegistry
from core.ledger.errors import ValidationError
from core.ledger.statements import build_profit_and_loss
from core.ledger.store import LedgerStore


def _to_int(value: str | int | None, name: str) -> int | None:
    if value is None or value == "" or value == ALL:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}: {value}") from None


class PnLService:
    """P&L service"""

    def __init__(self, db: SQLiteAdapter, registry: CategoryRegistry):
        self.db = db
        self.registry = registry
        self.ledger_store = LedgerStore(db)

    @staticmethod
    def resolve_period(
        year: str | int | None = None,
        month: str | int | None = None,
        fiscal: bool = False,
    ) -> tuple[DateWindow, int, int | None]:
        """Statement window

        - fiscal: Indian FY starting 1 April of `year`
        - month: one IST calendar month
        - otherwise: IST calendar year

        Returns:
            (window, year, month)
        """
        year_value = _to_int(year, "year")
        if year_value is None:
            year_value = year_of()
        month_value = _to_int(month, "month")

        if fiscal:
            return fiscal_year_window(year_value), year_value, None
        if month_value is not None:
            return month_window(year_value, month_value), year_value, month_value
        return year_window(year_value), year_value, None

    async def get_pnl(
        self,
        year: str | int | None = None,
        month: str | int | None = None,
        fiscal: bool = False,
    ) -> dict[str, Any]:
        """Profit & Loss for a period"""
        window, year_value, month_value = self.resolve_period(year, month, fiscal)
        entries = await self.ledger_store.entries_between(window.start, window.end)

        statement = build_profit_and_loss(
            entries,
            window,
            self.registry,
            year=year_value,
            month=month_value,
        )
        data = statement.to_dict()
        data["fiscal"] = fiscal
        return data
