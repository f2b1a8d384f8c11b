"""Shared fixtures for the catalog admin tests."""

from __future__ import annotations
import sys
from pathlib import Path
from typing import Any
import pytest
from typer.testing import CliRunner


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from factories import API_URL, EntryFactory, entry_payload  # noqa: E402
from libhunt_admin.models import CatalogEntry  # noqa: E402


@pytest.fixture()
def make_entry() -> EntryFactory:
    def _make(entry_id: str | None = "1", **overrides: Any) -> CatalogEntry:
        return CatalogEntry.model_validate(entry_payload(entry_id, **overrides))

    return _make


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def env(tmp_path: Path) -> dict[str, str]:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return {
        "LIBHUNT_API_URL": API_URL,
        "LIBHUNT_TOKEN": "token",
        "LIBHUNT_CLI_CONFIG": str(config_dir / "cli.toml"),
        "NO_COLOR": "1",
        "COLUMNS": "200",
    }
