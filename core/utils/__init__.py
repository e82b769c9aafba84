"""
Utility package

Shared helpers such as timezone handling
"""

from core.utils.timezone import (
    IST,
    to_ist,
    to_utc,
    format_ist,
    to_storage,
    from_storage,
    now_utc,
    now_ist,
)

__all__ = [
    "IST",
    "to_ist",
    "to_utc",
    "format_ist",
    "to_storage",
    "from_storage",
    "now_utc",
    "now_ist",
]
