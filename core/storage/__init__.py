"""
Storage module

Stores for the documents the ledger reconciles against (invoices, salary
slips) and for manual balance sheet items.
"""

from core.storage.balance_sheet_store import BalanceSheetItem, BalanceSheetStore
from core.storage.invoice_store import Invoice, InvoiceStore, PaymentRecord
from core.storage.salary_slip_store import SalarySlip, SalarySlipStore

__all__ = [
    "BalanceSheetItem",
    "BalanceSheetStore",
    "Invoice",
    "InvoiceStore",
    "PaymentRecord",
    "SalarySlip",
    "SalarySlipStore",
]
