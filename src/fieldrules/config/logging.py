"""structlog setup for the fieldrules CLI.

Library code logs through plain ``logging.getLogger(__name__)``; this module
routes those records (and any structlog loggers) through one stderr handler
rendered by structlog, either as console lines or as JSON.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "fieldrules"

# Third-party loggers that stay at WARNING even under --verbose.
QUIET_LOGGERS = ("pluggy",)


def _shared_processors(*, log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_json:
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(structlog.processors.UnicodeDecoder())
    return processors


def _build_handler(
    shared: list[structlog.types.Processor], *, log_json: bool
) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging to stderr through structlog.

    Args:
        verbose: Let ``fieldrules.*`` loggers emit DEBUG records.
            Otherwise only WARNING and above are shown.
        log_json: Render one JSON object per record instead of console lines.

    Safe to call repeatedly; each call replaces the root handler.
    """
    shared = _shared_processors(log_json=log_json)
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_build_handler(shared, log_json=log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
