"""
Web services package

Business logic behind the routes
"""

from web.services.balance_sheet_service import BalanceSheetService
from web.services.pnl_service import PnLService
from web.services.transaction_service import TransactionService

__all__ = [
    "BalanceSheetService",
    "PnLService",
    "TransactionService",
]
