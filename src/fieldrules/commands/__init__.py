"""Subcommand modules for fieldrules.

Provides register_commands() which uses deferred imports to keep
``fieldrules --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from fieldrules.commands.catalog import catalog
    from fieldrules.commands.check import check
    from fieldrules.commands.rules import rules
    from fieldrules.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(rules)
    cli.add_command(catalog)
    cli.add_command(check)
