"""
Accounting errors

Each error carries the HTTP status the web layer answers with.
"""


class AccountingError(Exception):
    """Base class for accounting errors"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountingError):
    """Invalid input (missing/invalid amount, type, or category)"""

    status_code = 400


class UnauthorizedError(AccountingError):
    """No valid session"""

    status_code = 401


class ForbiddenError(AccountingError):
    """Session lacks the required permission"""

    status_code = 403


class NotFoundError(AccountingError):
    """Unknown entry, invoice, slip, or balance sheet item"""

    status_code = 404
