"""
Type definitions

Core Enum and dataclass definitions.
Every Enum inherits from str so values serialize as plain strings.
"""

from dataclasses import dataclass, field
from enum import Enum


class AppMode(str, Enum):
    """Runtime mode (live books / sandbox books)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class EntryType(str, Enum):
    """Ledger entry direction

    Credit = money in, Debit = money out.
    """

    CREDIT = "Credit"
    DEBIT = "Debit"


class PaymentMode(str, Enum):
    """How the money moved"""

    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    UPI = "UPI"
    CHEQUE = "Cheque"
    OTHER = "Other"


class ReferenceType(str, Enum):
    """External document a ledger entry settles"""

    INVOICE = "Invoice"
    SALARY_SLIP = "SalarySlip"
    NONE = "None"


class InvoiceStatus(str, Enum):
    """Invoice payment status"""

    PENDING = "Pending"
    PARTIAL = "Partial"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class SalarySlipStatus(str, Enum):
    """Salary slip status"""

    DRAFT = "draft"
    FINALIZED = "finalized"
    PAID = "paid"


class BalanceSheetCategory(str, Enum):
    """Section of a manual balance sheet item"""

    FIXED_ASSET = "Fixed Asset"
    CURRENT_ASSET = "Current Asset"
    LONG_TERM_LIABILITY = "Long-term Liability"
    CURRENT_LIABILITY = "Current Liability"
    EQUITY = "Equity"


class Role(str, Enum):
    """User role"""

    ADMIN = "admin"
    STAFF = "staff"


@dataclass(frozen=True)
class Actor:
    """Authenticated session (immutable)

    Supplied by the session collaborator on every request.
    """

    id: str
    role: str = Role.STAFF.value
    permissions: tuple[str, ...] = field(default_factory=tuple)

    def has_permission(self, permission: str) -> bool:
        """Admin has access to everything"""
        if self.role == Role.ADMIN.value:
            return True
        return permission in self.permissions
