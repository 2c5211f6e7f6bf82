"""Log output setup for dcalc.

Modules log through ``logging.getLogger(__name__)``; this module only
decides how those records reach stderr.  structlog's
``ProcessorFormatter`` renders them either as aligned console lines
(default) or, with ``--log-json``, one JSON object per record carrying
``level``, ``logger`` and ``timestamp`` keys.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route log records to stderr, replacing any earlier handler.

    Args:
        verbose: Let ``dcalc.*`` DEBUG records through. When False, only
            WARNING and above are shown.
        log_json: Render records as JSON lines.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("dcalc").setLevel(logging.DEBUG if verbose else logging.WARNING)
