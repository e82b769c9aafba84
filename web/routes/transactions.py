"""
Transactions API routes

Ledger entry listing, creation, update and deletion.
Writes reconcile referenced invoices / salary slips in the same transaction.
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.categories import CategoryRegistry
from core.ledger.errors import ValidationError
from core.types import Actor
from web.dependencies import get_db, get_db_write, get_registry, require_accounts
from web.models.requests import TransactionCreateRequest, TransactionUpdateRequest
from web.services.transaction_service import TransactionService

router = APIRouter(prefix="/api/accounts", tags=["Transactions"])


@router.get("/transactions")
async def list_transactions(
    type: str | None = Query(default=None, description="Credit / Debit / all"),
    month: str | None = Query(default=None, description="1-12 or all"),
    year: str | None = Query(default=None, description="YYYY or all"),
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    search: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=Defaults.PAGE_SIZE, ge=1, le=Defaults.MAX_PAGE_SIZE),
    all: bool = Query(default=False, description="Ignore pagination"),
    db: SQLiteAdapter = Depends(get_db),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """List ledger entries

    meta.globalBalance is over the entire ledger, independent of filters.
    """
    service = TransactionService(db, registry)
    result = await service.list_transactions(
        type=type,
        month=month,
        year=year,
        start_date=start_date,
        end_date=end_date,
        search=search,
        page=page,
        limit=limit,
        fetch_all=all,
    )
    return {"success": True, **result}


@router.post("/transactions")
async def create_transaction(
    request: TransactionCreateRequest,
    db: SQLiteAdapter = Depends(get_db_write),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Record a ledger entry

    A referenced Invoice gets the payment applied; a referenced SalarySlip
    is marked paid.
    """
    service = TransactionService(db, registry)
    result = await service.create_transaction(
        request.model_dump(exclude_unset=True),
        actor_id=actor.id,
    )
    return {"success": True, **result}


@router.put("/transactions")
async def update_transaction(
    request: TransactionUpdateRequest,
    id: str | None = Query(default=None),
    db: SQLiteAdapter = Depends(get_db_write),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Partially update a ledger entry (id as query parameter or in the body)"""
    entry_id = id or request.id
    if not entry_id:
        raise ValidationError("ID required")

    service = TransactionService(db, registry)
    result = await service.update_transaction(
        entry_id,
        request.model_dump(exclude_unset=True, exclude={"id"}),
    )
    return {"success": True, **result}


@router.delete("/transactions")
async def delete_transaction(
    id: str | None = Query(default=None),
    db: SQLiteAdapter = Depends(get_db_write),
    registry: CategoryRegistry = Depends(get_registry),
    actor: Actor = Depends(require_accounts),
):
    """Delete a ledger entry after reverting its reconciliation"""
    service = TransactionService(db, registry)
    result = await service.delete_transaction(id)
    return {"success": True, **result}
