"""Log routing for postmeta.

All records go to stderr; stdout is reserved for command output (the saved
path under ``--quiet``, the payload under ``--json``). Modules log through
``logging.getLogger(__name__)``; those records pass through the structlog
pre-chain, so fields bound with :func:`article_log_context` (``op``,
``title``, ``path``) appear on every line logged while a post is being
saved or loaded.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

import structlog

PACKAGE_LOGGER = "postmeta"

_PRE_CHAIN: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _renderer(log_json: bool, stream: IO[str]) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Send log records to *stream* (default: the current ``sys.stderr``).

    Third-party loggers stay at WARNING. ``postmeta.*`` drops to DEBUG under
    ``--verbose``, which surfaces save locations and rejected edits.
    Calling this again replaces the previous handler.
    """
    stream = stream or sys.stderr

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, stream),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


@contextmanager
def article_log_context(op: str, **fields: Any) -> Iterator[None]:
    """Bind *op* and post *fields* to every record logged inside the block."""
    with structlog.contextvars.bound_contextvars(op=op, **fields):
        yield
