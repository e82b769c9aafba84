"""
Adapter test fixtures

In-memory document repositories sharing one state.
"""

from decimal import Decimal

import pytest

from adapters.mock.documents import (
    MockDocumentState,
    MockInvoiceRepository,
    MockSalarySlipRepository,
)


@pytest.fixture
def document_state() -> MockDocumentState:
    return MockDocumentState()


@pytest.fixture
def mock_invoices(document_state: MockDocumentState) -> MockInvoiceRepository:
    """Invoice repository with INV-001 (total 1000, unpaid)"""
    invoices = MockInvoiceRepository(document_state)
    invoices.add("inv-1", "INV-001", Decimal("1000"))
    return invoices


@pytest.fixture
def mock_slips(document_state: MockDocumentState) -> MockSalarySlipRepository:
    """Slip repository with one finalized slip (net pay 50000)"""
    slips = MockSalarySlipRepository(document_state)
    slips.add("slip-1", Decimal("50000"))
    return slips
