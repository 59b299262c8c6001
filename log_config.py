# log_config.py

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMAT = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{file}::{function}:{line}</>",
        "{message}",
    )
)


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    # drop loguru's default sink so nothing is printed twice
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)

    if log_file is not None:
        logger.add(
            str(log_file),
            format=LOG_FORMAT,
            level=level,
            rotation="1 day",
            retention="30 days",
        )
