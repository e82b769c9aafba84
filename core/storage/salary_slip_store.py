"""
SalarySlipStore - salary slip view used by the ledger

A finalized slip whose employee has payroll enabled is an accounts
payable until a ledger entry marks it paid.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.ledger.amounts import money
from core.types import SalarySlipStatus
from core.utils.timezone import from_storage, now_utc, to_storage

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_SELECT = """
    SELECT s.id, s.user_id, s.month, s.year, s.net_pay, s.status, s.paid_on,
           COALESCE(u.enable_payroll, 0)
    FROM salary_slip s
    LEFT JOIN payroll_user u ON u.id = s.user_id
"""


@dataclass
class SalarySlip:
    """Salary slip"""

    id: str
    user_id: str | None
    month: int
    year: int
    net_pay: Decimal
    status: str = SalarySlipStatus.FINALIZED.value
    paid_on: datetime | None = None
    payroll_enabled: bool = False

    @property
    def is_paid(self) -> bool:
        return self.status == SalarySlipStatus.PAID.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "month": self.month,
            "year": self.year,
            "netPay": money(self.net_pay),
            "status": self.status,
            "paidOn": to_storage(self.paid_on) if self.paid_on else None,
        }


def _row_to_slip(row: tuple[Any, ...]) -> SalarySlip:
    return SalarySlip(
        id=row[0],
        user_id=row[1],
        month=int(row[2]),
        year=int(row[3]),
        net_pay=Decimal(row[4]),
        status=row[5],
        paid_on=from_storage(row[6]) if row[6] else None,
        payroll_enabled=bool(row[7]),
    )


class SalarySlipStore:
    """Salary slip store

    Args:
        db: SQLite adapter
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def find_by_id(self, slip_id: str) -> SalarySlip | None:
        row = await self.db.fetchone(f"{_SELECT} WHERE s.id = ?", (slip_id,))
        return _row_to_slip(row) if row else None

    async def save(self, slip: SalarySlip) -> None:
        """Persist status and paid date"""
        await self.db.execute(
            "UPDATE salary_slip SET status = ?, paid_on = ? WHERE id = ?",
            (
                slip.status,
                to_storage(slip.paid_on) if slip.paid_on else None,
                slip.id,
            ),
        )

    async def create(
        self,
        user_id: str | None,
        month: int,
        year: int,
        net_pay: Decimal,
        status: str = SalarySlipStatus.FINALIZED.value,
        slip_id: str | None = None,
    ) -> SalarySlip:
        """Insert a new slip (used by seed scripts and tests)"""
        slip = SalarySlip(
            id=slip_id or str(uuid.uuid4()),
            user_id=user_id,
            month=month,
            year=year,
            net_pay=net_pay,
            status=status,
        )
        await self.db.execute(
            """
            INSERT INTO salary_slip
                (id, user_id, month, year, net_pay, status, paid_on, created_at)
            VALUES (?, ?, ?, ?, ?, ?, NULL, ?)
            """,
            (
                slip.id,
                slip.user_id,
                slip.month,
                slip.year,
                str(slip.net_pay),
                slip.status,
                to_storage(now_utc()),
            ),
        )
        logger.debug(f"Created salary slip: {slip.id} ({month}/{year})")
        return slip

    async def create_user(
        self,
        name: str,
        enable_payroll: bool = True,
        user_id: str | None = None,
    ) -> str:
        """Insert a payroll user

        Returns:
            user id
        """
        user_id = user_id or str(uuid.uuid4())
        await self.db.execute(
            "INSERT INTO payroll_user (id, name, enable_payroll) VALUES (?, ?, ?)",
            (user_id, name, 1 if enable_payroll else 0),
        )
        return user_id

    async def payable(self) -> list[SalarySlip]:
        """Finalized slips whose employee has payroll enabled"""
        rows = await self.db.fetchall(
            f"{_SELECT} WHERE s.status = ? AND u.enable_payroll = 1 "
            "ORDER BY s.year ASC, s.month ASC",
            (SalarySlipStatus.FINALIZED.value,),
        )
        return [_row_to_slip(row) for row in rows]
