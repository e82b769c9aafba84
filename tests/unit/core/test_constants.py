"""
core/constants.py tests

Paths are pathlib.Path and constants are reachable.
"""

from decimal import Decimal
from pathlib import Path

from core.constants import PROJECT_ROOT, Accounting, Defaults, Paths


class TestProjectRoot:
    """PROJECT_ROOT"""

    def test_is_absolute_path(self) -> None:
        assert isinstance(PROJECT_ROOT, Path)
        assert PROJECT_ROOT.is_absolute()

    def test_contains_core_directory(self) -> None:
        assert (PROJECT_ROOT / "core").exists()


class TestPaths:
    """Paths"""

    def test_all_paths_are_path(self) -> None:
        for name in ("CONFIG_DIR", "DATA_DIR", "LOGS_DIR", "SETTINGS_FILE", "PROD_DB", "DEV_DB"):
            assert isinstance(getattr(Paths, name), Path), name

    def test_db_files_differ_by_mode(self) -> None:
        assert Paths.PROD_DB != Paths.DEV_DB
        assert Paths.PROD_DB.parent == Paths.DATA_DIR

    def test_settings_file_location(self) -> None:
        assert Paths.SETTINGS_FILE == Paths.CONFIG_DIR / "settings.yaml"


class TestAccounting:
    """Accounting constants"""

    def test_ist_offset(self) -> None:
        assert Accounting.UTC_OFFSET_MINUTES == 5 * 60 + 30

    def test_status_tolerance(self) -> None:
        assert Accounting.STATUS_TOLERANCE == Decimal("1")

    def test_fiscal_year_starts_in_april(self) -> None:
        assert Accounting.FISCAL_YEAR_START_MONTH == 4


class TestDefaults:
    """Defaults"""

    def test_page_sizes(self) -> None:
        assert 0 < Defaults.PAGE_SIZE <= Defaults.MAX_PAGE_SIZE

    def test_token_algorithm(self) -> None:
        assert Defaults.TOKEN_ALGORITHM == "HS256"
