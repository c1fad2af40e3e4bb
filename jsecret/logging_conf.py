"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

import structlog

_LOGGING_INITIALISED = False


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> structlog.stdlib.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger.

    Diagnostics go to stderr so stdout stays reserved for findings.
    """

    global _LOGGING_INITIALISED

    if not _LOGGING_INITIALISED:
        level = "DEBUG" if verbose else "WARNING"
        handlers: dict[str, dict] = {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json",
                "stream": "ext://sys.stderr",
            },
        }
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers["scan_file"] = {
                "class": "logging.FileHandler",
                "level": "INFO",
                "filename": str(log_file),
                "encoding": "utf-8",
                "formatter": "json",
            }
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "json": {
                        "()": "pythonjsonlogger.json.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": handlers,
                "loggers": {
                    "jsecret": {
                        "handlers": list(handlers),
                        "level": "DEBUG" if verbose else "INFO",
                        "propagate": False,
                    },
                },
            }
        )

        # Event fields travel as `extra` so the JSON formatter emits them as keys
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.render_to_log_kwargs,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("jsecret")


def component_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a logger under the ``jsecret`` namespace bound to a component."""

    return structlog.get_logger(f"jsecret.{component}").bind(component=component)


__all__ = ["component_logger", "configure_logging"]
