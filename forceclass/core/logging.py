import logging
import sys

from pythonjsonlogger import jsonlogger

from forceclass.core.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL):
    """
    Configures centralized JSON logging on stdout.
    Keeps classification logic verbose and quiets the database/transport layers.
    """
    # 1. Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 2. Prevent duplicate logs by removing existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # 3. StreamHandler for stdout
    log_handler = logging.StreamHandler(sys.stdout)

    # 4. JSON format
    formatter = jsonlogger.JsonFormatter(
        fmt='%(asctime)s %(levelname)s %(name)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ'
    )
    log_handler.setFormatter(formatter)
    root_logger.addHandler(log_handler)

    # 5. Library-specific verbosity
    logging.getLogger("forceclass").setLevel(level)

    # Noise reduction for infrastructure and transport layers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    root_logger.info("Logging infrastructure initialized successfully.")
