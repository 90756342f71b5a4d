"""Structured logging for gocoveralls runs.

structlog events are rendered by stdlib handlers, one per configured output:
- console (stderr/stdout) handlers pause while a Rich spinner is live
- each output has its own format (console or JSON) and level
- the service job id is bound into every event once the job is built
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from gocoveralls.config.models import LoggingConfig, LogOutputConfig

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Libraries that log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def bind_job_id(job_id: str) -> None:
    """Attach the service job id to all subsequent log events."""
    structlog.contextvars.bind_contextvars(job_id=job_id)


def clear_job_id() -> None:
    structlog.contextvars.unbind_contextvars("job_id")


class ConsoleSuppressingFilter(logging.Filter):
    """Drop console records while a spinner owns the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        # Deferred: progress imports this module lazily too
        from gocoveralls.core.progress import is_console_suppressed

        return not is_console_suppressed()


def configure_logging(*, config: LoggingConfig | None = None, level: str = "WARNING") -> None:
    """Route structlog through stdlib handlers built from ``config``.

    Without a config a single console output on stderr at ``level`` is used,
    which is what the CLI installs before configuration has been loaded.
    """
    from gocoveralls.config.models import LoggingConfig

    if config is None:
        config = LoggingConfig(level=level.upper())  # type: ignore[arg-type]

    root_level = _LEVELS[config.level]
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigured once config is loaded, so loggers must not be cached
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(root_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for output in config.outputs:
        handler = _open_handler(output.destination)
        handler.setLevel(_LEVELS[output.level or config.level])
        handler.setFormatter(_formatter(output, pre_chain))
        root.addHandler(handler)


def _is_console(destination: str) -> bool:
    return destination in ("stderr", "stdout")


def _open_handler(destination: str) -> logging.Handler:
    handler: logging.Handler
    if destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")

    if _is_console(destination):
        handler.addFilter(ConsoleSuppressingFilter())
    return handler


def _formatter(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=_is_console(output.destination) and sys.stderr.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
