"""
Hardcoded constants - fixed values that rarely change

Important: paths must always use pathlib.Path (cross-platform)
"""

from decimal import Decimal
from pathlib import Path


# Project root (two levels above this file: core/constants.py -> project/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """Default values"""

    APP_NAME: str = "Ledgerline"
    APP_VERSION: str = "1.0.0"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # Transaction listing
    PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 500

    TOKEN_ALGORITHM: str = "HS256"


class Accounting:
    """Accounting constants"""

    # Business timezone (IST, UTC+05:30)
    UTC_OFFSET_MINUTES: int = 330

    # Tolerance when comparing amount_paid against total_amount (1 currency unit)
    STATUS_TOLERANCE: Decimal = Decimal("1")

    # Stored amount precision
    AMOUNT_QUANTUM: Decimal = Decimal("0.01")

    # Indian fiscal year starts in April
    FISCAL_YEAR_START_MONTH: int = 4

    PAYMENT_NOTE_PREFIX: str = "Payment via Accounts"


class Paths:
    """Project paths (pathlib - OS independent)"""

    # Directories
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    SCRIPTS_LOGS_DIR: Path = LOGS_DIR / "scripts"

    # Config file
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB files
    PROD_DB: Path = DATA_DIR / "ledger_prod.db"
    DEV_DB: Path = DATA_DIR / "ledger_dev.db"
