import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging for the linkqueue package.

    All modules log through children of the ``linkqueue`` logger, so
    configuring it here controls output for extraction, matching and
    queue submission alike.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist

    Returns:
        The configured ``linkqueue`` logger
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("linkqueue")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()

        # stderr keeps stdout free for --json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(file_handler)

    logger.propagate = False

    return logger
