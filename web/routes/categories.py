"""
Accounting categories API

GET /api/accounts/categories?type=Credit|Debit
"""

from fastapi import APIRouter, Depends, Query

from core.ledger.categories import CategoryRegistry
from core.ledger.errors import ValidationError
from core.types import Actor, EntryType
from web.dependencies import get_registry, require_accounts

router = APIRouter(prefix="/api/accounts", tags=["Categories"])


@router.get("/categories")
async def list_categories(
    type: str | None = Query(default=None, description="Credit / Debit (omit for all)"),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Categories usable for an entry type, flat and grouped by P&L section"""
    if not type:
        return {"success": True, "data": [c.to_dict() for c in registry]}

    try:
        entry_type = EntryType(type).value
    except ValueError:
        raise ValidationError(f"Invalid type: {type}") from None

    grouped = registry.get_grouped_categories_by_type(entry_type)
    return {
        "success": True,
        "data": [c.to_dict() for c in registry.get_categories_by_type(entry_type)],
        "grouped": {
            group: [c.to_dict() for c in categories]
            for group, categories in grouped.items()
        },
    }
