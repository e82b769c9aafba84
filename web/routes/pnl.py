"""
P&L API routes

Profit & Loss statement for a month, calendar year, or fiscal year
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.categories import CategoryRegistry
from core.types import Actor
from web.dependencies import get_db, get_registry, require_accounts
from web.services.pnl_service import PnLService

router = APIRouter(prefix="/api/accounts", tags=["PnL"])


@router.get("/pnl")
async def get_pnl(
    year: str | None = Query(default=None, description="YYYY (default: current IST year)"),
    month: str | None = Query(default=None, description="1-12; omit or 'all' for the full year"),
    fiscal: bool = Query(default=False, description="Indian fiscal year starting April of `year`"),
    db: SQLiteAdapter = Depends(get_db),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Profit & Loss statement

    Margins are one-decimal strings, "0.0" when there is no revenue.
    """
    service = PnLService(db, registry)
    return {"success": True, "data": await service.get_pnl(year, month, fiscal)}
