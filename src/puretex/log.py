"""Logging setup for the command-line tool"""
import logging

logger = logging.getLogger("puretex")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", force: bool = False) -> None:
    """Configure logging without clobbering host-app handlers by default."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Warning: Invalid log level '{level}', defaulting to INFO")
        numeric_level = logging.INFO

    root = logging.getLogger()
    if force or not root.handlers:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=force)
        logger.setLevel(numeric_level)
        return

    # Embedded mode: only touch the puretex logger hierarchy
    logger.setLevel(numeric_level)
