from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the tracker package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tracker.core import config as core_config  # noqa: E402
from tracker.core.config import Settings  # noqa: E402
from tracker.db.session import build_engine  # noqa: E402
from tracker.repositories.json_storage import JSONRepository  # noqa: E402
from tracker.repositories.sql_repository import SQLRepository  # noqa: E402


def make_settings(tmp_path: Path, backend: str = "json") -> Settings:
    return Settings(
        app_env="test",
        host="127.0.0.1",
        port=3001,
        storage_backend=backend,
        data_file=str(tmp_path / "data.json"),
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        database_echo=False,
        cors_origins=("*",),
        log_level="DEBUG",
        reload=False,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def json_repo(tmp_path):
    repo = JSONRepository(tmp_path / "data.json")
    repo.init()
    yield repo
    repo.close()


@pytest.fixture()
def sql_repo(tmp_path):
    """SQLite-backed repository with full teardown so the file is not left locked on Windows."""
    repo = SQLRepository(build_engine(f"sqlite:///{tmp_path / 'test.db'}"))
    repo.init()
    yield repo
    repo.close()


@pytest.fixture(params=["json", "sql"])
def repository(request):
    """Runs a test once per storage strategy."""
    return request.getfixturevalue(f"{request.param}_repo")
