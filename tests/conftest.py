"""
Global pytest configuration for the static site server.

This file provides shared fixtures and enforces Python version requirements.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.server import create_app
from app.server.config import ENV_VARS, ServerConfig

# Add tests directory to sys.path to support imports from test fixtures
_tests_dir = Path(__file__).parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))

from site_fixtures import DOCS_INDEX_HTML, INDEX_HTML, LOGO_PNG, SITE_CSS  # noqa: E402

_MIN_PY_VERSION = (3, 11)


def _verify_python_version() -> str:
    """Return the interpreter version string or exit if <3.11."""
    version_info = sys.version_info
    version_str = ".".join(map(str, version_info[:3]))
    if version_info < _MIN_PY_VERSION:
        pytest.exit(
            f"ERROR: pytest must run on Python 3.11+ (detected {version_str}).",
            returncode=1,
        )
    return version_str


def pytest_report_header(config: pytest.Config) -> str:
    version_str = _verify_python_version()
    return f"Python interpreter verified for pytest: {version_str}"


@pytest.fixture(scope="session", autouse=True)
def register_markers(pytestconfig: pytest.Config) -> None:
    """Register project markers to prevent unknown marker warnings."""
    markers = {
        "unit": "Unit tests that should execute quickly.",
        "integration": "Tests driving the full ASGI application.",
    }
    for name, description in markers.items():
        pytestconfig.addinivalue_line("markers", f"{name}: {description}")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host environment variables and config files out of tests."""
    for env_var in list(ENV_VARS.values()) + ["APP_CONFIG_FILE"]:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by tests that call configure_logging()."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """A small public root with HTML, CSS, binary and hidden files."""
    root = tmp_path / "public"
    (root / "css").mkdir(parents=True)
    (root / "images").mkdir()
    (root / "docs").mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "css" / "site.css").write_bytes(SITE_CSS)
    (root / "images" / "logo.png").write_bytes(LOGO_PNG)
    (root / "docs" / "index.html").write_bytes(DOCS_INDEX_HTML)
    (root / ".env").write_text("SECRET=1\n")
    (tmp_path / "outside.txt").write_text("outside the public root\n")
    return root


@pytest.fixture
def server_config(public_dir: Path) -> ServerConfig:
    return ServerConfig(static_dir=public_dir)


@pytest.fixture
def app(server_config: ServerConfig) -> FastAPI:
    return create_app(server_config)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
