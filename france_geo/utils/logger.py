import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL = logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.
    Each logger gets its own stdout handler and does not propagate.
    """
    logger = logging.getLogger(f"france_geo.{name}")

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logger.setLevel(LOG_LEVEL)
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def configure_logging(debug: bool = False):
    """
    Quiet framework loggers; our own loggers carry their handlers.
    """
    # Request lines are logged by LoggingMiddleware
    logging.getLogger("uvicorn.access").disabled = True

    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if debug else logging.WARNING
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
