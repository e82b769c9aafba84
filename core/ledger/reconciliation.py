"""
Reconciliation engine

Keeps documents referenced by ledger entries in step with the ledger:
- Invoice: amount paid, status, payment history
- SalarySlip: paid / finalized status and paid date

The engine does not open transactions. The Ledger calls it inside the
same transaction as the entry write, so both commit or roll back together.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from core.constants import Accounting
from core.ledger.entry import LedgerEntry
from core.storage.invoice_store import PaymentRecord
from core.types import InvoiceStatus, SalarySlipStatus
from core.utils.timezone import now_utc

if TYPE_CHECKING:
    from adapters.interfaces import IInvoiceRepository, ISalarySlipRepository, ISlipReferenceCounter

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class ReconciliationOutcome(str, Enum):
    """What happened to the referenced document"""

    NONE = "none"  # entry has no reference
    APPLIED = "applied"
    SKIPPED = "skipped"  # referenced document no longer exists


def invoice_status(
    amount_paid: Decimal,
    total_amount: Decimal,
    tolerance: Decimal = Accounting.STATUS_TOLERANCE,
) -> InvoiceStatus:
    """Invoice status for an amount paid

    Paid within `tolerance` of the total counts as fully paid.

    Args:
        amount_paid: amount paid so far
        total_amount: invoice total
        tolerance: rounding slack (default 1 currency unit)

    Returns:
        Paid / Partial / Pending
    """
    if amount_paid >= total_amount - tolerance:
        return InvoiceStatus.PAID
    if amount_paid > ZERO:
        return InvoiceStatus.PARTIAL
    return InvoiceStatus.PENDING


def payment_note(payment_mode: str) -> str:
    return f"{Accounting.PAYMENT_NOTE_PREFIX}: {payment_mode}"


class ReconciliationEngine:
    """Applies ledger mutations to referenced documents

    Args:
        invoices: invoice repository
        slips: salary slip repository
        references: counts other entries still pointing at a slip
    """

    def __init__(
        self,
        invoices: IInvoiceRepository,
        slips: ISalarySlipRepository,
        references: ISlipReferenceCounter,
    ):
        self.invoices = invoices
        self.slips = slips
        self.references = references

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def on_created(self, entry: LedgerEntry) -> ReconciliationOutcome:
        """Apply a newly created entry to its referenced document"""
        ref = entry.reference

        if ref.is_invoice:
            invoice = await self.invoices.find_by_id(ref.id)
            if invoice is None:
                return self._skipped(entry, "invoice")

            invoice.amount_paid += entry.amount
            invoice.status = invoice_status(invoice.amount_paid, invoice.total_amount).value
            invoice.payment_history.append(
                PaymentRecord(
                    amount=entry.amount,
                    date=now_utc().replace(microsecond=0),
                    note=payment_note(entry.payment_mode),
                    transaction_id=entry.id,
                )
            )
            await self.invoices.save(invoice)

            logger.info(
                f"Invoice {invoice.invoice_no} payment applied: "
                f"+{entry.amount} -> paid={invoice.amount_paid} status={invoice.status}"
            )
            return ReconciliationOutcome.APPLIED

        if ref.is_salary_slip:
            slip = await self.slips.find_by_id(ref.id)
            if slip is None:
                return self._skipped(entry, "salary slip")

            if slip.is_paid:
                logger.warning(f"Salary slip {slip.id} was already paid; entry {entry.id} pays it again")

            slip.status = SalarySlipStatus.PAID.value
            slip.paid_on = entry.date
            await self.slips.save(slip)

            logger.info(f"Salary slip {slip.id} marked paid by entry {entry.id}")
            return ReconciliationOutcome.APPLIED

        return ReconciliationOutcome.NONE

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def on_updated(self, entry: LedgerEntry, amount_delta: Decimal) -> ReconciliationOutcome:
        """Apply an edit of an existing entry

        The invoice payment row is always rewritten from the entry; the
        amount paid only moves when the amount changed.

        Args:
            entry: entry after the patch
            amount_delta: new amount - old amount
        """
        ref = entry.reference

        if ref.is_invoice:
            invoice = await self.invoices.find_by_id(ref.id)
            if invoice is None:
                return self._skipped(entry, "invoice")

            record = invoice.find_payment(entry.id)
            if record is not None:
                record.amount = entry.amount
                record.date = entry.date
                record.note = payment_note(entry.payment_mode)

            if amount_delta != ZERO:
                invoice.amount_paid = max(ZERO, invoice.amount_paid + amount_delta)
                invoice.status = invoice_status(invoice.amount_paid, invoice.total_amount).value

            await self.invoices.save(invoice)

            logger.info(
                f"Invoice {invoice.invoice_no} payment updated: "
                f"delta={amount_delta} -> paid={invoice.amount_paid} status={invoice.status}"
            )
            return ReconciliationOutcome.APPLIED

        if ref.is_salary_slip:
            slip = await self.slips.find_by_id(ref.id)
            if slip is None:
                return self._skipped(entry, "salary slip")

            slip.status = SalarySlipStatus.PAID.value
            slip.paid_on = entry.date
            await self.slips.save(slip)
            return ReconciliationOutcome.APPLIED

        return ReconciliationOutcome.NONE

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def on_deleted(self, entry: LedgerEntry) -> ReconciliationOutcome:
        """Roll back the effect of an entry that is being deleted"""
        ref = entry.reference

        if ref.is_invoice:
            invoice = await self.invoices.find_by_id(ref.id)
            if invoice is None:
                return self._skipped(entry, "invoice")

            invoice.remove_payments(entry.id)
            invoice.amount_paid = max(ZERO, invoice.amount_paid - entry.amount)
            invoice.status = invoice_status(invoice.amount_paid, invoice.total_amount).value
            await self.invoices.save(invoice)

            logger.info(
                f"Invoice {invoice.invoice_no} payment reverted: "
                f"-{entry.amount} -> paid={invoice.amount_paid} status={invoice.status}"
            )
            return ReconciliationOutcome.APPLIED

        if ref.is_salary_slip:
            slip = await self.slips.find_by_id(ref.id)
            if slip is None:
                return self._skipped(entry, "salary slip")

            others = await self.references.count_referencing_slip(slip.id, exclude_id=entry.id)
            if others > 0:
                logger.info(
                    f"Salary slip {slip.id} still paid by {others} other entr"
                    f"{'y' if others == 1 else 'ies'}; status kept"
                )
                return ReconciliationOutcome.APPLIED

            slip.status = SalarySlipStatus.FINALIZED.value
            slip.paid_on = None
            await self.slips.save(slip)

            logger.info(f"Salary slip {slip.id} reverted to finalized")
            return ReconciliationOutcome.APPLIED

        return ReconciliationOutcome.NONE

    @staticmethod
    def _skipped(entry: LedgerEntry, kind: str) -> ReconciliationOutcome:
        logger.warning(
            f"Referenced {kind} not found, reconciliation skipped: "
            f"entry={entry.id} ref={entry.reference.id}"
        )
        return ReconciliationOutcome.SKIPPED
