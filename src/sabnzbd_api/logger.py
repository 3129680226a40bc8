from pathlib import Path
from sys import stdout
from typing import Optional

from loguru import logger

# Silent until the application opts in
logger.disable("sabnzbd_api")


def configure_logger(
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    rotation: str = "00:00",
    retention: str = "1 week",
    log_name: str = "sabnzbd_api",
    log_dir: Optional[Path] = None,
):
    """Configure logger with given settings.

    Args:
        console_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        file_level: File log level
        rotation: Log rotation settings (time like "00:00" or size like "500 MB")
        retention: How long to keep old logs
        log_name: Base name for the log file
        log_dir: Directory for the log file; no file sink is added when None
    """
    # Remove all existing handlers first
    logger.remove()

    # Add console handler
    logger.add(
        stdout,
        level=console_level.upper(),
    )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{log_name}_{{time:YYYY-MM-DD}}.log"

        # Add file handler with rotation and retention
        logger.add(
            log_file,
            rotation=rotation,
            retention=retention,
            level=file_level.upper(),
            encoding="utf-8",
            mode="a",
        )

    logger.enable("sabnzbd_api")


__all__ = ["logger", "configure_logger"]
