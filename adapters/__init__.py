"""
Adapter layer

Storage access and the Protocol interfaces the ledger depends on.
Protocol-based so tests can swap in the mocks.
"""

from adapters.interfaces import (
    IInvoiceRepository,
    ISalarySlipRepository,
    ISlipReferenceCounter,
)

__all__ = [
    "IInvoiceRepository",
    "ISalarySlipRepository",
    "ISlipReferenceCounter",
]
