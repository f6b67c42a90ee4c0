# rtdetect/utils/io.py

"""Logging setup utilities"""

import logging
from typing import Optional


def setup_logging(log_file: Optional[str] = None,
                  level: int = logging.INFO) -> None:
    """
    Setup logging configuration

    Args:
        log_file: Optional log file path
        level: Logging level
    """
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
