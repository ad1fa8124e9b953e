"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from fieldrules.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from fieldrules.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Failed validations print one ``field: message`` line per failure.
    """
    if result.ok:
        return f"OK: {result.op}"
    failures = result.failures
    if failures:
        return "\n".join(f"{k}: {m}" for k, msgs in failures.items() for m in msgs)
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op} — {msg}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="fr.ok"), Text(f"  {result.op}", style="fr.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="fr.key"), Text(str(value)), sep="")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="fr.error"),
        Text(f"  {result.op}", style="fr.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )

    failures = result.failures
    if failures:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Field", style="fr.field")
        table.add_column("Message", style="fr.message")
        for key, messages in failures.items():
            for message in messages:
                table.add_row(Text(key), Text(message))
        console.print(table)
    elif verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "checked", result.data.get("checked", 0))


def _render_rules(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    if not items:
        console.print(Text("  No rules registered.", style="dim"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Field", style="fr.field")
    table.add_column("Rule", style="fr.rule")
    table.add_column("Message")
    for item in items:
        for constraint in item["constraints"]:
            table.add_row(
                Text(item["field"]),
                Text(constraint["rule"]),
                Text(constraint["message"]),
            )
    console.print(table)


def _render_catalog(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for item in result.data.get("items", []):
        suffix = " (parameterised)" if item["parameterised"] else ""
        console.print(Text(f"  {item['name']}", style="fr.rule"), Text(suffix, style="dim"), sep="")


def _render_check(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "rule", result.data["rule"])
    _field(console, "value", repr(result.data["value"]))


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "validate": _render_validate,
    "list_rules": _render_rules,
    "list_catalog": _render_catalog,
    "check_rule": _render_check,
}
