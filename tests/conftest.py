"""Shared pytest fixtures and test helpers for fieldrules tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from fieldrules.domain.catalog import clear_custom_rules

RULES_TOML = """\
[fields.Email]
required = true
rules = [{ rule = "email", message = "Please enter a valid e-mail" }]

[fields.ZipCode]
rules = [{ rule = "zip_code" }]

[fields.Gender]
rules = [{ rule = "equals_any", values = ["male", "female"] }]

[fields."Address.City"]
rules = [{ rule = "alpha" }]

[plugins]
enabled = false
"""

PLUGIN_SOURCE = '''\
import pluggy

hookimpl = pluggy.HookimplMarker("fieldrules")


def no_spaces(value):
    if " " in value:
        return "Value must not contain spaces."
    return None


class NoSpacesPlugin:
    @hookimpl
    def register_rules(self):
        return {"no_spaces": no_spaces}
'''


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate each test from config env vars, plugin rules and log handlers."""
    monkeypatch.delenv("FIELDRULES_CONFIG", raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package_logger = logging.getLogger("fieldrules")
    package_level = package_logger.level
    yield
    clear_custom_rules()
    root.handlers = original_handlers
    root.setLevel(original_level)
    package_logger.setLevel(package_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Temporary project directory holding a ``fieldrules.toml``."""
    (tmp_path / "fieldrules.toml").write_text(RULES_TOML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def _isolated_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI discovers its rules file.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_dir)


def write_plugin(directory: Path, name: str = "no_spaces.py") -> Path:
    """Write the sample ``no_spaces`` rule plugin into *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(PLUGIN_SOURCE, encoding="utf-8")
    return path
