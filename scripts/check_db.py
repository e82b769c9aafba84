#!/usr/bin/env python3
"""
Ledger DB status check

Usage:
    python -m scripts.check_db --mode development
    python -m scripts.check_db --mode production --recent 20
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path
from core.ledger.amounts import money
from core.ledger.entry import LedgerFilters
from core.ledger.store import LedgerStore
from core.logging import setup_logging
from core.storage import InvoiceStore, SalarySlipStore

logger = logging.getLogger(__name__)


async def main(mode: str, recent: int) -> int:
    db_path = get_db_path(mode)
    if not db_path.exists():
        logger.error(f"DB not found: {db_path}")
        return 1

    async with SQLiteAdapter(db_path, readonly=True) as db:
        store = LedgerStore(db)
        total = await store.count(LedgerFilters())
        balance = await store.global_balance()
        receivable = await InvoiceStore(db).receivable()
        payable = await SalarySlipStore(db).payable()

        print(f"DB Path: {db_path}")
        print(f"Transactions: {total}")
        print(f"Global balance: {money(balance)}")
        print(f"Open invoices: {len(receivable)}")
        print(f"Payable salary slips: {len(payable)}")

        entries = await store.list(LedgerFilters(limit=recent))
        print(f"\nRecent transactions ({len(entries)}):")
        for e in entries:
            print(
                f"  - {e.date.date()} {e.type:<6} {money(e.amount):>12}  "
                f"{e.category}  ref={e.reference.type}:{e.reference.id or '-'}"
            )

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Ledger DB status check")
    parser.add_argument(
        "--mode",
        choices=["production", "development"],
        default="development",
        help="Runtime mode (selects the DB file)",
    )
    parser.add_argument("--recent", type=int, default=10, help="Number of recent transactions")
    args = parser.parse_args()

    setup_logging("scripts")
    sys.exit(asyncio.run(main(args.mode, args.recent)))
