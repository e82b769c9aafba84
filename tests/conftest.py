"""
Shared pytest fixtures

Temporary directories, settings files, a schema-initialized SQLite DB and
the category registry.
"""

import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.ledger.categories import CategoryRegistry, get_default_registry


@pytest.fixture
def temp_dir() -> Path:
    """OS independent temporary directory"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """settings.yaml for tests (development mode)"""
    content = """# test settings.yaml
mode: development

web:
  secret_key: "test_jwt_secret_key_xyz"
"""
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_settings_file_production(temp_dir: Path) -> Path:
    """settings.yaml for tests (production mode, explicit algorithm)"""
    content = """mode: production

web:
  secret_key: "prod_jwt_secret_key_xyz"
  token_algorithm: "HS512"
"""
    path = temp_dir / "settings_prod.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_settings_file_invalid_mode(temp_dir: Path) -> Path:
    """settings.yaml with an invalid mode"""
    content = """mode: staging

web:
  secret_key: "jwt_secret"
"""
    path = temp_dir / "settings_invalid.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest_asyncio.fixture
async def db(temp_dir: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """Temporary DB with the full schema"""
    adapter = SQLiteAdapter(temp_dir / "test_ledger.db")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest.fixture
def registry() -> CategoryRegistry:
    """Built-in accounting categories"""
    return get_default_registry()
