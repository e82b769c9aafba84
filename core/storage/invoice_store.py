"""
InvoiceStore - invoice view used by the ledger

Only the fields the accounting module reads or writes are modelled:
totals, amount paid, status, and the payment history. The store never
commits; writes run inside the caller's transaction.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.ledger.amounts import money
from core.types import InvoiceStatus
from core.utils.timezone import from_storage, now_utc, to_storage

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

# Statuses that still carry an open receivable
RECEIVABLE_STATUSES: tuple[str, ...] = (
    InvoiceStatus.PENDING.value,
    InvoiceStatus.PARTIAL.value,
    InvoiceStatus.OVERDUE.value,
)


@dataclass
class PaymentRecord:
    """One payment applied to an invoice"""

    amount: Decimal
    date: datetime
    note: str | None = None
    transaction_id: str | None = None


@dataclass
class Invoice:
    """Invoice

    amount_paid mirrors the sum of ledger entries referencing the invoice.
    """

    id: str
    invoice_no: str
    total_amount: Decimal
    amount_paid: Decimal = Decimal("0")
    status: str = InvoiceStatus.PENDING.value
    client_name: str | None = None
    payment_history: list[PaymentRecord] = field(default_factory=list)

    @property
    def outstanding(self) -> Decimal:
        """Unpaid balance, never negative"""
        return max(Decimal("0"), self.total_amount - self.amount_paid)

    def find_payment(self, transaction_id: str) -> PaymentRecord | None:
        for record in self.payment_history:
            if record.transaction_id == transaction_id:
                return record
        return None

    def remove_payments(self, transaction_id: str) -> int:
        """Drop every history row created by a ledger entry

        Returns:
            number of rows removed
        """
        before = len(self.payment_history)
        self.payment_history = [
            r for r in self.payment_history if r.transaction_id != transaction_id
        ]
        return before - len(self.payment_history)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "invoiceNo": self.invoice_no,
            "clientName": self.client_name,
            "totalAmount": money(self.total_amount),
            "amountPaid": money(self.amount_paid),
            "status": self.status,
            "paymentHistory": [
                {
                    "amount": money(r.amount),
                    "date": to_storage(r.date),
                    "note": r.note,
                    "transactionId": r.transaction_id,
                }
                for r in self.payment_history
            ],
        }


class InvoiceStore:
    """Invoice store

    Args:
        db: SQLite adapter
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def find_by_id(self, invoice_id: str) -> Invoice | None:
        """Load an invoice with its payment history"""
        row = await self.db.fetchone(
            """
            SELECT id, invoice_no, client_name, total_amount, amount_paid, status
            FROM invoice WHERE id = ?
            """,
            (invoice_id,),
        )
        if row is None:
            return None

        invoice = Invoice(
            id=row[0],
            invoice_no=row[1],
            client_name=row[2],
            total_amount=Decimal(row[3]),
            amount_paid=Decimal(row[4]),
            status=row[5],
        )

        history = await self.db.fetchall(
            """
            SELECT amount, date, note, transaction_id
            FROM invoice_payment WHERE invoice_id = ?
            ORDER BY position ASC, id ASC
            """,
            (invoice_id,),
        )
        invoice.payment_history = [
            PaymentRecord(
                amount=Decimal(h[0]),
                date=from_storage(h[1]),
                note=h[2],
                transaction_id=h[3],
            )
            for h in history
        ]
        return invoice

    async def save(self, invoice: Invoice) -> None:
        """Persist amount paid, status, and the full payment history"""
        await self.db.execute(
            "UPDATE invoice SET amount_paid = ?, status = ? WHERE id = ?",
            (str(invoice.amount_paid), invoice.status, invoice.id),
        )
        await self.db.execute(
            "DELETE FROM invoice_payment WHERE invoice_id = ?",
            (invoice.id,),
        )
        if invoice.payment_history:
            await self.db.executemany(
                """
                INSERT INTO invoice_payment
                    (invoice_id, amount, date, note, transaction_id, position)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        invoice.id,
                        str(r.amount),
                        to_storage(r.date),
                        r.note,
                        r.transaction_id,
                        position,
                    )
                    for position, r in enumerate(invoice.payment_history)
                ],
            )

    async def create(
        self,
        invoice_no: str,
        total_amount: Decimal,
        client_name: str | None = None,
        status: str = InvoiceStatus.PENDING.value,
        invoice_id: str | None = None,
    ) -> Invoice:
        """Insert a new invoice (used by seed scripts and tests)"""
        invoice = Invoice(
            id=invoice_id or str(uuid.uuid4()),
            invoice_no=invoice_no,
            client_name=client_name,
            total_amount=total_amount,
            status=status,
        )
        await self.db.execute(
            """
            INSERT INTO invoice
                (id, invoice_no, client_name, total_amount, amount_paid, status, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                invoice.id,
                invoice.invoice_no,
                invoice.client_name,
                str(invoice.total_amount),
                str(invoice.amount_paid),
                invoice.status,
                to_storage(now_utc()),
            ),
        )
        logger.debug(f"Created invoice: {invoice.invoice_no}")
        return invoice

    async def receivable(self) -> list[Invoice]:
        """Invoices with an open receivable (Pending, Partial, Overdue)

        Payment history is not loaded.
        """
        placeholders = ", ".join("?" for _ in RECEIVABLE_STATUSES)
        rows = await self.db.fetchall(
            f"""
            SELECT id, invoice_no, client_name, total_amount, amount_paid, status
            FROM invoice WHERE status IN ({placeholders})
            ORDER BY invoice_no ASC
            """,
            RECEIVABLE_STATUSES,
        )
        return [
            Invoice(
                id=r[0],
                invoice_no=r[1],
                client_name=r[2],
                total_amount=Decimal(r[3]),
                amount_paid=Decimal(r[4]),
                status=r[5],
            )
            for r in rows
        ]
