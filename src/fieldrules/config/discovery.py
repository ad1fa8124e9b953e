"""Locating and reading ``fieldrules.toml``.

The rules file is found the way git finds ``.git/``: starting in the
working directory and moving up to the filesystem root. ``FIELDRULES_CONFIG``
pins an exact file and disables the search.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from fieldrules.config.models import FieldRulesConfig

CONFIG_FILENAME = "fieldrules.toml"
CONFIG_ENV_VAR = "FIELDRULES_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``fieldrules.toml`` at or above *start*.

    When ``FIELDRULES_CONFIG`` is set, that file is returned if it exists
    and no search happens; a dangling value yields ``None``.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as UTF-8 TOML.

    Raises:
        tomllib.TOMLDecodeError: the file is not valid TOML.
    """
    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_config(path: Path | None = None, cwd: Path | None = None) -> FieldRulesConfig:
    """Read and validate a rules file outside the CLI.

    *path* wins over discovery from *cwd*. With no file anywhere the
    result is an empty configuration, which builds an empty registry.

    Raises:
        tomllib.TOMLDecodeError: the file is not valid TOML.
        pydantic.ValidationError: the file does not match the schema.
    """
    path = path or find_config(cwd)
    if path is None:
        return FieldRulesConfig()
    return FieldRulesConfig.model_validate(read_toml(path))
