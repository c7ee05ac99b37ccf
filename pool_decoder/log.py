import sys

from loguru import logger


def setup_logger(level: str = "INFO", json_logs: bool = False):
    """Replace loguru's default sink with one stderr sink.

    stdout is left for decoded output.
    """
    logger.remove()

    if json_logs:
        logger.add(sys.stderr, serialize=True, level=level.upper())
        return

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level:7s}</level> | {message}",
        level=level.upper(),
        colorize=True,
    )
