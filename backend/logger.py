import sys

from loguru import logger

from backend.config import settings


def setup_logger(level: str | None = None) -> None:
    """Replace loguru's default handler with a single stderr sink.

    `level` defaults to the configured log level.
    """
    level = level or settings.log_level
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )
    logger.debug(f"Logger initialized with level={level}")
