"""Command: list rule names usable in fieldrules.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldrules.commands._base import FieldRulesCommand

if TYPE_CHECKING:
    from fieldrules.commands._context import AppContext


@click.command(
    cls=FieldRulesCommand,
    examples="""\
  fieldrules catalog
  fieldrules --no-plugins catalog""",
)
@click.pass_obj
def catalog(app: AppContext) -> None:
    """List built-in and plugin-provided rule names."""
    from fieldrules.services.validation import ValidationService

    app.load_plugins()
    app.emit(ValidationService.catalog())
