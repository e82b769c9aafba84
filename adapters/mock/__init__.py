"""
Mock adapters

In-memory implementations for tests.
Follow the Protocols in adapters.interfaces so they swap in for the
SQLite stores.
"""

from adapters.mock.documents import (
    MockDocumentState,
    MockInvoiceRepository,
    MockSalarySlipRepository,
)

__all__ = [
    "MockDocumentState",
    "MockInvoiceRepository",
    "MockSalarySlipRepository",
]
