"""Log output for the threeway CLI.

Records under the ``threeway`` logger namespace, whether they come from
``structlog.get_logger`` or ``logging.getLogger(__name__)``, pass through
one structlog processor chain and end up on stderr: readable console
lines by default, JSON lines with ``--log-json``.  Other libraries'
loggers are left as the host application configured them.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAMESPACE = "threeway"


def _threshold(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _enrich() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    render: structlog.types.Processor
    if log_json:
        render = structlog.processors.JSONRenderer()
    else:
        render = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_enrich(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, render],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> logging.Logger:
    """Route the ``threeway`` namespace to stderr and return its logger.

    ``verbose`` shows DEBUG records, ``quiet`` hides everything below
    ERROR; otherwise WARNING and above are shown.  Safe to call again:
    the previous handler is replaced, never stacked.
    """
    structlog.configure(
        processors=[*_enrich(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.handlers[:] = [_stderr_handler(log_json=log_json)]
    logger.setLevel(_threshold(verbose=verbose, quiet=quiet))
    logger.propagate = False
    return logger
