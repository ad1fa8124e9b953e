"""Rich console and theme used by the human renderers.

Renderers print into an in-memory console and return the captured text,
so the CLI decides where it goes (stdout on success, stderr on failure).
Rich leaves out color codes when the real stream is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

FIELDRULES_THEME = Theme(
    {
        "fr.ok": "bold green",
        "fr.error": "bold red",
        "fr.op": "bold cyan",
        "fr.key": "dim",
        "fr.field": "bold",
        "fr.rule": "blue",
        "fr.message": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a themed console that records into a string buffer."""
    return Console(
        file=StringIO(),
        theme=FIELDRULES_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text printed so far to a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "get_output() needs a console created by create_console()"
        raise TypeError(msg)
    return buffer.getvalue()
