"""
Logging setup for the 'structeq' logger namespace

The engine only ever logs at DEBUG level (swallowed read errors, skipped branches, recorded mismatches), so this is
mostly useful to find out why two objects were, or weren't, considered equal.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'structeq' logger.

    Pass logging.DEBUG to see each mismatch as it is recorded ("Mismatch at 'path' (reason): a / b"), members
    whose value couldn't be read, and nested members skipped once the depth ran out. At INFO and above the engine
    stays silent.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also save logs to a file.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger("structeq")
    logger.setLevel(level)

    # Drop handlers from any earlier call so messages aren't duplicated
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
