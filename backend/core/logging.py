import logging

from .config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application-wide logging based on settings.

    The format includes timestamp, log level, logger name, and message.
    """
    log_level_name = settings.log_level.upper()
    level = getattr(logging, log_level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    # SQL echo stays off unless explicitly raised on these loggers.
    for logger_name in ("sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))
