"""Invocation context shared by every fieldrules subcommand.

The root group builds one :class:`AppContext`. Plugins and the rule
registry are loaded on first use, so ``--help`` and ``--version`` never
read rules or import plugin code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from fieldrules.config.logging import configure_logging
from fieldrules.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from fieldrules.config.settings import FieldRulesSettings
    from fieldrules.domain.registry import Rules
    from fieldrules.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Per-invocation state handed to subcommands via ``@click.pass_obj``."""

    def __init__(self, settings: FieldRulesSettings) -> None:
        self.settings = settings
        self._rules: Rules | None = None
        self._plugins_loaded = False
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def load_plugins(self) -> None:
        """Load rule plugins once, unless disabled by flag or config."""
        if self._plugins_loaded:
            return
        self._plugins_loaded = True
        if self.settings.no_plugins or not self.settings.plugins.enabled:
            return
        from fieldrules.plugins.manager import PluginManager

        names = PluginManager().discover_and_load(local_dir=self.settings.plugins_dir)
        logger.debug("Loaded plugins: %s", names)

    @property
    def rules(self) -> Rules:
        """The frozen rule registry built from ``[fields.*]``.

        Raises:
            click.ClickException: the rules file references unknown rules
                or invalid parameters.
        """
        if self._rules is None:
            from fieldrules.config.builder import build_rules
            from fieldrules.domain.catalog import RuleConfigError

            self.load_plugins()
            try:
                self._rules = build_rules(self.settings.fields)
            except RuleConfigError as exc:
                source = self.settings.config_path or "settings"
                msg = f"Invalid rules in {source}: {exc}"
                raise click.ClickException(msg) from exc
        return self._rules

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Successful results go to stdout; on failure the rendered result goes
        to stderr and the process exits with status 1. Outside JSON mode,
        warnings follow on stderr (JSON output already carries them).
        """
        output = format_result(result, settings=self.output)
        click.echo(output, err=not result.ok)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if not result.ok:
            raise SystemExit(1)
