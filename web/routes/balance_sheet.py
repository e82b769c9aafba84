"""
Balance sheet API routes

GET    /api/accounts/balance-sheet?asOf=  - computed balance sheet
POST   /api/accounts/balance-sheet        - add a manual item
DELETE /api/accounts/balance-sheet?id=    - remove a manual item
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.categories import CategoryRegistry
from core.types import Actor
from web.dependencies import get_db, get_db_write, get_registry, require_accounts
from web.models.requests import BalanceSheetItemRequest
from web.services.balance_sheet_service import BalanceSheetService

router = APIRouter(prefix="/api/accounts", tags=["Balance Sheet"])


@router.get("/balance-sheet")
async def get_balance_sheet(
    as_of: str | None = Query(default=None, alias="asOf", description="ISO date (default: now)"),
    db: SQLiteAdapter = Depends(get_db),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Balance sheet

    Scans the whole ledger; asOf selects the year whose net income is
    shown separately from retained earnings.
    """
    service = BalanceSheetService(db, registry)
    return {"success": True, "data": await service.get_balance_sheet(as_of)}


@router.post("/balance-sheet")
async def create_balance_sheet_item(
    request: BalanceSheetItemRequest,
    db: SQLiteAdapter = Depends(get_db_write),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Add a manual balance sheet item"""
    service = BalanceSheetService(db, registry)
    item = await service.create_item(
        name=request.name,
        category=request.category,
        amount=request.amount,
        notes=request.notes,
        actor_id=actor.id,
    )
    return {"success": True, "data": item}


@router.delete("/balance-sheet")
async def delete_balance_sheet_item(
    id: str | None = Query(default=None),
    db: SQLiteAdapter = Depends(get_db_write),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Remove a manual balance sheet item"""
    service = BalanceSheetService(db, registry)
    await service.delete_item(id)
    return {"success": True}
