"""Logging configuration for the patient intake service.

Application logs go to stderr. Audit records are regular loguru records
carrying an ``audit`` entry in ``extra``; when an audit file is configured
they are additionally serialized there as JSON lines.
"""

import logging
import sys

from loguru import logger

AUDIT_EXTRA_KEY = "audit"


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def is_audit_record(record) -> bool:
    """Loguru filter selecting audit records."""
    return AUDIT_EXTRA_KEY in record["extra"]


def setup_logging(log_level: str, audit_log_file: str | None = None) -> None:
    """Configure loguru logging for the entire application.

    Args:
        log_level: Log level to use (from settings, which handles env vars and CLI args).
        audit_log_file: Optional path receiving serialized audit records.
    """
    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        level=log_level,
        colorize=True,
    )

    if audit_log_file:
        logger.add(
            audit_log_file,
            level="INFO",
            filter=is_audit_record,
            serialize=True,
        )
        logger.info(f"Audit records written to: {audit_log_file}")

    logger.info(f"Log level set to: {log_level}")

    # Redirect all standard logging to loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in logging.Logger.manager.loggerDict:
        logging_logger = logging.getLogger(name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    # One setting controls the server and library loggers alike
    for noisy_logger in ("uvicorn", "uvicorn.error", "asyncio", "patient_intake"):
        logging.getLogger(noisy_logger).setLevel(log_level)


def setup_sqlalchemy_logging() -> None:
    """Configure SQLAlchemy logging to use loguru."""
    for logger_name in ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.engine.base", "sqlalchemy.dialects", "sqlalchemy.pool"):
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False
