"""Command: validate flat key/value input against the configured rules."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import click

from fieldrules.commands._base import FieldRulesCommand

if TYPE_CHECKING:
    from fieldrules.commands._context import AppContext


def _parse_pair(pair: str) -> tuple[str, str]:
    key, sep, value = pair.partition("=")
    if not sep or not key:
        msg = f"Expected KEY=VALUE, got {pair!r}"
        raise click.BadParameter(msg, param_hint="PAIRS")
    return key, value


def _read_input(stream: IO[str]) -> dict[str, str]:
    try:
        data = json.load(stream)
    except UnicodeDecodeError as exc:
        msg = f"Input is not valid UTF-8: {exc}"
        raise click.BadParameter(msg, param_hint="--input") from exc
    except json.JSONDecodeError as exc:
        msg = f"Input is not valid JSON: {exc}"
        raise click.BadParameter(msg, param_hint="--input") from exc
    if not isinstance(data, dict):
        msg = "Input must be a JSON object of string values"
        raise click.BadParameter(msg, param_hint="--input")
    bad = sorted(k for k, v in data.items() if not isinstance(v, str))
    if bad:
        msg = f"Input values must be strings; offending keys: {', '.join(bad)}"
        raise click.BadParameter(msg, param_hint="--input")
    return data


@click.command(
    cls=FieldRulesCommand,
    examples="""\
  fieldrules validate Email=jane@example.com ZipCode=33145
  fieldrules validate --input signup.json
  fieldrules --json validate Gender=unknown
  echo '{"Email": ""}' | fieldrules validate --input -""",
)
@click.argument("pairs", nargs=-1)
@click.option(
    "--input",
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="JSON object of string values ('-' for stdin).",
)
@click.pass_obj
def validate(app: AppContext, pairs: tuple[str, ...], input_file: IO[str] | None) -> None:
    """Validate KEY=VALUE pairs (and/or a JSON object) against the rules.

    Only the keys given are checked. Pairs override keys from --input.
    """
    if not pairs and input_file is None:
        msg = "Provide KEY=VALUE pairs or --input."
        raise click.UsageError(msg)

    params: dict[str, str] = _read_input(input_file) if input_file is not None else {}
    params.update(_parse_pair(p) for p in pairs)

    from fieldrules.services.validation import ValidationService

    app.emit(ValidationService(app.rules).validate(params))
