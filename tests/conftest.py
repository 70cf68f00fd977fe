"""Shared test fixtures for the melt test suite."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture to create files under tmp_path.

    Usage:
        def test_something(write_files):
            root = write_files({
                "etc/config.toml": "debug = true",
                "project/myapp.json": '{"port": 8080}',
            })
    """

    def _write_files(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return tmp_path

    return _write_files


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """An empty home directory for the injected environment."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def isolated_options() -> Callable[..., dict[str, Any]]:
    """Factory for declare() options with the file tiers switched off.

    Keyword arguments are merged into the options; ``config_locations``
    entries override the disabled defaults.
    """

    def _options(app_name: str = "testapp", **overrides: Any) -> dict[str, Any]:
        locations = {"system": False, "user": False, "project": False}
        locations.update(overrides.pop("config_locations", {}))
        options: dict[str, Any] = {"app_name": app_name, "config_locations": locations}
        options.update(overrides)
        return options

    return _options


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for settings tests.
    """
    from melt.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog's default configuration after each test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
