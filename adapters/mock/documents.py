"""
Mock document repositories

In-memory invoice and salary slip repositories for tests.
Follow the IInvoiceRepository / ISalarySlipRepository /
ISlipReferenceCounter Protocols.
"""

import copy
from dataclasses import dataclass, field
from decimal import Decimal

from core.storage.invoice_store import RECEIVABLE_STATUSES, Invoice
from core.storage.salary_slip_store import SalarySlip
from core.types import InvoiceStatus, SalarySlipStatus


@dataclass
class MockDocumentState:
    """Mock state (kept in memory)"""

    # invoice_id -> Invoice
    invoices: dict[str, Invoice] = field(default_factory=dict)

    # slip_id -> SalarySlip
    slips: dict[str, SalarySlip] = field(default_factory=dict)

    # entry_id -> slip_id, for entries referencing a slip
    slip_references: dict[str, str] = field(default_factory=dict)

    save_count: int = 0


class MockInvoiceRepository:
    """Mock invoice repository

    find_by_id hands out copies so unsaved changes never leak into the
    state, the same way a database round trip behaves.

    Example:
    ```python
    invoices = MockInvoiceRepository()
    invoices.add("inv-1", "INV-001", Decimal("1000"))

    invoice = await invoices.find_by_id("inv-1")
    ```
    """

    def __init__(self, state: MockDocumentState | None = None):
        self.state = state or MockDocumentState()

    def add(
        self,
        invoice_id: str,
        invoice_no: str,
        total_amount: Decimal,
        amount_paid: Decimal = Decimal("0"),
        status: str = InvoiceStatus.PENDING.value,
    ) -> Invoice:
        """Register an invoice"""
        invoice = Invoice(
            id=invoice_id,
            invoice_no=invoice_no,
            total_amount=total_amount,
            amount_paid=amount_paid,
            status=status,
        )
        self.state.invoices[invoice_id] = invoice
        return invoice

    def get(self, invoice_id: str) -> Invoice:
        """Stored invoice (for assertions)"""
        return self.state.invoices[invoice_id]

    async def find_by_id(self, invoice_id: str) -> Invoice | None:
        invoice = self.state.invoices.get(invoice_id)
        return copy.deepcopy(invoice) if invoice else None

    async def save(self, invoice: Invoice) -> None:
        self.state.invoices[invoice.id] = copy.deepcopy(invoice)
        self.state.save_count += 1

    async def receivable(self) -> list[Invoice]:
        return [
            copy.deepcopy(i)
            for i in self.state.invoices.values()
            if i.status in RECEIVABLE_STATUSES
        ]


class MockSalarySlipRepository:
    """Mock salary slip repository

    Also counts slip references, registered through link().
    """

    def __init__(self, state: MockDocumentState | None = None):
        self.state = state or MockDocumentState()

    def add(
        self,
        slip_id: str,
        net_pay: Decimal,
        status: str = SalarySlipStatus.FINALIZED.value,
        payroll_enabled: bool = True,
        month: int = 1,
        year: int = 2026,
    ) -> SalarySlip:
        """Register a slip"""
        slip = SalarySlip(
            id=slip_id,
            user_id=f"user-{slip_id}",
            month=month,
            year=year,
            net_pay=net_pay,
            status=status,
            payroll_enabled=payroll_enabled,
        )
        self.state.slips[slip_id] = slip
        return slip

    def get(self, slip_id: str) -> SalarySlip:
        return self.state.slips[slip_id]

    def link(self, entry_id: str, slip_id: str) -> None:
        """Record that a ledger entry references a slip"""
        self.state.slip_references[entry_id] = slip_id

    async def find_by_id(self, slip_id: str) -> SalarySlip | None:
        slip = self.state.slips.get(slip_id)
        return copy.deepcopy(slip) if slip else None

    async def save(self, slip: SalarySlip) -> None:
        self.state.slips[slip.id] = copy.deepcopy(slip)
        self.state.save_count += 1

    async def payable(self) -> list[SalarySlip]:
        return [
            copy.deepcopy(s)
            for s in self.state.slips.values()
            if s.status == SalarySlipStatus.FINALIZED.value and s.payroll_enabled
        ]

    async def count_referencing_slip(self, slip_id: str, exclude_id: str | None = None) -> int:
        return sum(
            1
            for entry_id, ref in self.state.slip_references.items()
            if ref == slip_id and entry_id != exclude_id
        )
