import os
import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(debug_mode: bool = True, log_dir: str = "logs", log_to_file: bool = False):
    """
    Route loguru output for a quote session.

    Console level follows `debug_mode`; the optional file sink always
    records DEBUG and rotates per 10 MB.
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug_mode else "INFO", format=CONSOLE_FORMAT)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, "quote_{time}.log"),
            level="DEBUG",
            rotation="10 MB",
            retention="1 week",
        )

    logger.info(f"Logging initialized (debug={debug_mode}, file={log_to_file})")
