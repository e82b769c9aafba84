#!/usr/bin/env python3
"""
Seed invoices and salary slips for local testing

Creates the schema if needed, inserts a few sample documents and prints
a session token with the accounts permission.

Usage:
    python -m scripts.seed_documents --mode development
    python -m scripts.seed_documents --mode development --invoices 5 --employees 3
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from core.auth import ACCOUNTS_PERMISSION, issue_token
from core.config.loader import ConfigLoadError, get_settings
from core.logging import setup_logging
from core.storage import InvoiceStore, SalarySlipStore
from core.utils.timezone import now_ist

logger = logging.getLogger(__name__)


async def seed(db: SQLiteAdapter, invoices: int, employees: int) -> None:
    """Insert sample invoices, payroll users and current-month slips"""
    invoice_store = InvoiceStore(db)
    slip_store = SalarySlipStore(db)
    today = now_ist()
    stamp = today.strftime("%Y%m%d%H%M%S")

    async with db.transaction():
        for i in range(1, invoices + 1):
            invoice = await invoice_store.create(
                invoice_no=f"INV-{stamp}-{i:03d}",
                total_amount=Decimal(10000 * i),
                client_name=f"Client {i}",
            )
            logger.info(f"Invoice {invoice.invoice_no}: {invoice.total_amount}")

        for i in range(1, employees + 1):
            user_id = await slip_store.create_user(f"Employee {i}")
            slip = await slip_store.create(
                user_id=user_id,
                month=today.month,
                year=today.year,
                net_pay=Decimal(25000 + 5000 * i),
            )
            logger.info(f"Salary slip {slip.id}: {slip.net_pay} ({slip.month}/{slip.year})")


async def main(mode: str, invoices: int, employees: int) -> int:
    db_path = get_db_path(mode)
    logger.info(f"Seeding {db_path}")

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        await seed(db, invoices, employees)

    try:
        settings = get_settings()
    except ConfigLoadError as e:
        logger.warning(f"No session token issued: {e}")
        return 0

    token = issue_token(
        "seed-admin",
        settings.web_secret_key,
        permissions=[ACCOUNTS_PERMISSION],
        algorithm=settings.token_algorithm,
    )
    print(f"\nBearer token (accounts):\n{token}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed sample accounting documents")
    parser.add_argument(
        "--mode",
        choices=["production", "development"],
        default="development",
        help="Runtime mode (selects the DB file)",
    )
    parser.add_argument("--invoices", type=int, default=3, help="Number of invoices")
    parser.add_argument("--employees", type=int, default=2, help="Number of payroll users")
    args = parser.parse_args()

    setup_logging("scripts")
    sys.exit(asyncio.run(main(args.mode, args.invoices, args.employees)))
