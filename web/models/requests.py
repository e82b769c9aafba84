"""
Request schemas (Pydantic)

Web API request validation. Bodies use camelCase keys.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting camelCase (or snake_case) keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReferenceRequest(CamelModel):
    """Document a ledger entry settles"""

    type: str = Field(default="None", description="Invoice / SalarySlip / None")
    id: str | None = Field(default=None, description="Document ID")
    document_no: str | None = Field(default=None, description="Document number for display")


class TransactionCreateRequest(CamelModel):
    """Ledger entry creation request"""

    date: str | None = Field(default=None, description="Entry date (YYYY-MM-DD = IST midnight)")
    type: str | None = Field(default=None, description="Credit / Debit")
    category: str | None = Field(default=None, description="Free-text category label")
    accounting_category: str | None = Field(default=None, description="Accounting category id")
    amount: Decimal | None = Field(default=None, description="Amount (> 0)")
    description: str | None = Field(default=None, description="Description")
    payment_mode: str | None = Field(default=None, description="Cash / Bank Transfer / UPI / Cheque / Other")
    reference: ReferenceRequest | None = Field(default=None, description="Referenced document")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "date": "2026-02-10",
                    "type": "Credit",
                    "category": "Client payment",
                    "accountingCategory": "invoice_payment",
                    "amount": 1000,
                    "description": "INV-001 settlement",
                    "paymentMode": "Bank Transfer",
                    "reference": {"type": "Invoice", "id": "inv-1", "documentNo": "INV-001"},
                },
                {
                    "date": "2026-02-12",
                    "type": "Debit",
                    "category": "AWS",
                    "accountingCategory": "hosting_cloud",
                    "amount": 100,
                    "paymentMode": "UPI",
                },
            ]
        },
    )


class TransactionUpdateRequest(CamelModel):
    """Ledger entry partial update

    Only the keys present in the body change. The id may be given here or
    as the ?id= query parameter.
    """

    id: str | None = Field(default=None, description="Entry ID")
    date: str | None = Field(default=None, description="Entry date")
    type: str | None = Field(default=None, description="Credit / Debit")
    category: str | None = Field(default=None, description="Free-text category label")
    accounting_category: str | None = Field(default=None, description="Accounting category id")
    amount: Decimal | None = Field(default=None, description="Amount (> 0)")
    description: str | None = Field(default=None, description="Description")
    payment_mode: str | None = Field(default=None, description="Payment mode")


class BalanceSheetItemRequest(CamelModel):
    """Manual balance sheet item creation request"""

    name: str | None = Field(default=None, description="Item name")
    category: str | None = Field(
        default=None,
        description="Fixed Asset / Current Asset / Long-term Liability / Current Liability / Equity",
    )
    amount: Decimal | None = Field(default=None, description="Amount")
    notes: str | None = Field(default=None, description="Notes")
