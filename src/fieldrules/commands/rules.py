"""Command: list the constraints registered from the rules file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldrules.commands._base import FieldRulesCommand

if TYPE_CHECKING:
    from fieldrules.commands._context import AppContext


@click.command(
    cls=FieldRulesCommand,
    examples="""\
  fieldrules rules
  fieldrules --json rules
  fieldrules -c forms/signup.toml rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List registered fields and their constraints in evaluation order."""
    from fieldrules.services.validation import ValidationService

    app.emit(ValidationService(app.rules).describe_rules())
