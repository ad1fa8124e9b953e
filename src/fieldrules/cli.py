"""``fieldrules`` command-line entry point."""

from __future__ import annotations

from typing import Any

import click

from fieldrules import __version__
from fieldrules.commands import register_commands
from fieldrules.commands._context import AppContext
from fieldrules.config.settings import FieldRulesSettings


@click.group(
    invoke_without_command=True,
    epilog="Rules are read from the nearest fieldrules.toml (or $FIELDRULES_CONFIG).",
)
@click.version_option(version=__version__, prog_name="fieldrules")
@click.option("-c", "--config", "config_path", default=None, help="Use this rules file.")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only failures (or OK).")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error detail.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("--no-plugins", is_flag=True, help="Do not load rule plugins.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: Any) -> None:
    """Validate string fields against declarative rules."""
    ctx.obj = AppContext(FieldRulesSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
