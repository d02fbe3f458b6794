import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from core.config import LOG_LEVEL

ROOT_LOGGER_NAME = "auto"


def setup_logging(level: str = LOG_LEVEL):
    """
    Configures centralized JSON logging on stdout.
    Application loggers live below the "auto" namespace, infrastructure
    loggers are turned down to WARNING.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Prevent duplicate logs by removing existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_handler = logging.StreamHandler(sys.stdout)
    formatter = JsonFormatter(
        fmt='%(asctime)s %(levelname)s %(name)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ'
    )
    log_handler.setFormatter(formatter)
    root_logger.addHandler(log_handler)

    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level.upper())

    # Noise reduction for transport and driver layers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.info("Logging infrastructure initialized successfully.")


def get_logger(name: str) -> logging.Logger:
    """Returns the application logger for a component, e.g. get_logger("auto_service")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
