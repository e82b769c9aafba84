"""
Web models package

Pydantic schema definitions
"""

from web.models.requests import (
    BalanceSheetItemRequest,
    CamelModel,
    ReferenceRequest,
    TransactionCreateRequest,
    TransactionUpdateRequest,
)
from web.models.responses import (
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Requests
    "BalanceSheetItemRequest",
    "CamelModel",
    "ReferenceRequest",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
]
