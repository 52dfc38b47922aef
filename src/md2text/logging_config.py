"""Logging setup for the converter service.

Application logs and uvicorn access logs get separate handlers, each writing
either to a console stream or to a rotating file. JSON output is produced by
python-json-logger when enabled.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, TextIO

from pythonjsonlogger import jsonlogger

from .config import LoggingConfig

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# LogRecord attributes that are not user-supplied context
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that always emits logger, level and timestamp plus any context fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["logger"] = record.name
        log_record["level"] = record.levelname
        log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_record[key] = value


def _build_handler(
    log_file: str | None,
    stream: TextIO,
    level: str,
    formatter: logging.Formatter,
    config: LoggingConfig,
) -> logging.Handler:
    """Create a rotating file handler if a path is given, else a stream handler."""
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            filename=str(path),
            maxBytes=config.log_rotation_size,
            backupCount=config.log_rotation_count,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(config: LoggingConfig) -> None:
    """Configure logging with separate application and access handlers.

    Args:
        config: Logging configuration settings
    """
    if config.json_logs:
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s %(message)s",
            datefmt=DATE_FORMAT,
        )
        access_formatter = formatter
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=DATE_FORMAT,
        )
        access_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s",
            datefmt=DATE_FORMAT,
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(
        _build_handler(config.error_log_file, sys.stderr, config.log_level, formatter, config)
    )

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.setLevel(config.access_log_level)
    access_logger.propagate = False
    access_logger.handlers.clear()
    access_logger.addHandler(
        _build_handler(
            config.access_log_file,
            sys.stdout,
            config.access_log_level,
            access_formatter,
            config,
        )
    )

    for name in ("uvicorn", "uvicorn.error", "md2text", "src.md2text"):
        logging.getLogger(name).setLevel(config.log_level)

    logging.getLogger("playwright").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)

    root_logger.info("Logging configured successfully")
    root_logger.info(f"Log level: {config.log_level}")
    root_logger.info(f"JSON logs: {config.json_logs}")
    root_logger.info(f"Error logs: {config.error_log_file or 'stderr'}")
    root_logger.info(f"Access logs: {config.access_log_file or 'stdout'}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log a message with additional context fields.

    With JSON logging enabled the context fields become top-level attributes
    of the record.

    Example:
        log_with_context(
            logger, logging.INFO,
            "Conversion completed",
            source="upload",
            input_chars=1024,
            output_chars=870,
        )
    """
    logger.log(level, message, extra=context)
