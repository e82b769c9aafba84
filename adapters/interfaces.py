"""
Adapter interface definitions

Defined as Protocols so stores can be injected and swapped for the
in-memory fakes in adapters.mock. Every implementation must follow them.
Amounts are always Decimal.
"""

from typing import Protocol, runtime_checkable

from core.storage.invoice_store import Invoice
from core.storage.salary_slip_store import SalarySlip


@runtime_checkable
class IInvoiceRepository(Protocol):
    """Invoice repository used by the reconciliation engine"""

    async def find_by_id(self, invoice_id: str) -> Invoice | None:
        """Load an invoice with its payment history

        Returns:
            Invoice or None (unknown id)
        """
        ...

    async def save(self, invoice: Invoice) -> None:
        """Persist amount paid, status and payment history"""
        ...

    async def receivable(self) -> list[Invoice]:
        """Invoices with an open receivable"""
        ...


@runtime_checkable
class ISalarySlipRepository(Protocol):
    """Salary slip repository used by the reconciliation engine"""

    async def find_by_id(self, slip_id: str) -> SalarySlip | None:
        """Load a slip

        Returns:
            SalarySlip or None (unknown id)
        """
        ...

    async def save(self, slip: SalarySlip) -> None:
        """Persist status and paid date"""
        ...

    async def payable(self) -> list[SalarySlip]:
        """Finalized slips of payroll-enabled employees"""
        ...


@runtime_checkable
class ISlipReferenceCounter(Protocol):
    """Counts ledger entries referencing a salary slip"""

    async def count_referencing_slip(self, slip_id: str, exclude_id: str | None = None) -> int:
        ...
