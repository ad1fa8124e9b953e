"""Pydantic models for ``fieldrules.toml``.

Sparse TOML contract: defaults baked here, the file only lists fields
and any overrides. A minimal file needs a single ``[fields."<name>"]``
table.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ConstraintConfig(BaseModel):
    """One entry of a field's ``rules`` array.

    ``rule`` names a catalog entry. ``values``, ``format`` and ``pattern``
    are forwarded to factories (``equals_any``, ``date``, ``matches``).
    """

    model_config = {"frozen": True, "extra": "forbid"}

    rule: str
    message: str = ""
    values: list[str] | None = None
    format: str | None = None
    pattern: str | None = None

    def params(self) -> dict[str, Any]:
        """Factory keyword arguments that were actually set."""
        raw = {"values": self.values, "format": self.format, "pattern": self.pattern}
        return {k: v for k, v in raw.items() if v is not None}


class FieldConfig(BaseModel):
    """[fields."<name>"] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    required: bool = False
    rules: list[ConstraintConfig] = Field(default_factory=list)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".fieldrules/plugins"


class FieldRulesConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    fields: dict[str, FieldConfig] = Field(default_factory=dict)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
