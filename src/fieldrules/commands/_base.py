"""Click command class shared by every fieldrules subcommand.

Commands declare usage ``examples=`` alongside their help text. The
examples are printed by ``--examples`` rather than padding ``--help``,
which only carries a pointer to them.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

EXAMPLES_HINT = "Run with --examples for sample invocations."


def examples_option(examples: str) -> click.Option:
    """Build an eager ``--examples`` flag that prints *examples* and exits."""
    text = textwrap.indent(textwrap.dedent(examples).strip("\n"), "  ")

    def _show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{text}")
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show,
        help="Show usage examples and exit.",
    )


class FieldRulesCommand(click.Command):
    """A :class:`click.Command` accepting an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        if examples and not kwargs.get("epilog"):
            kwargs["epilog"] = EXAMPLES_HINT
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(examples_option(examples))
