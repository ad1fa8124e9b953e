"""Command: evaluate one catalog rule against one value."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from fieldrules.commands._base import FieldRulesCommand

if TYPE_CHECKING:
    from fieldrules.commands._context import AppContext


@click.command(
    cls=FieldRulesCommand,
    examples="""\
  fieldrules check email jane@example.com
  fieldrules check equals_any female --value male --value female
  fieldrules check date 1998-04-20 --format %Y-%m-%d
  fieldrules check matches abc123 --pattern '^[a-z]+[0-9]+$'""",
)
@click.argument("rule_name", metavar="RULE")
@click.argument("value")
@click.option("--value", "values", multiple=True, help="Allowed value (equals_any).")
@click.option("--format", "fmt", default=None, help="strptime format (date).")
@click.option("--pattern", default=None, help="Regular expression (matches).")
@click.pass_obj
def check(
    app: AppContext,
    rule_name: str,
    value: str,
    values: tuple[str, ...],
    fmt: str | None,
    pattern: str | None,
) -> None:
    """Check VALUE against the catalog rule RULE."""
    from fieldrules.services.validation import ValidationService

    params: dict[str, Any] = {}
    if values:
        params["values"] = list(values)
    if fmt is not None:
        params["format"] = fmt
    if pattern is not None:
        params["pattern"] = pattern

    app.load_plugins()
    app.emit(ValidationService.check_rule(rule_name, value, **params))
