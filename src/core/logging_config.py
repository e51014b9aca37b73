"""
Logging configuration for analysis runs.

Engine modules log through ``logging.getLogger(__name__)`` and never install
handlers themselves. Callers (batch jobs, notebooks, services) call
``setup_logging`` once to attach console and rotating-file output to the
package logger, so every ``src.*`` module inherits it.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config import config


def setup_logging(
    logger_name: str = "src",
    level: Optional[str] = None,
    logs_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        logger_name: Name of the logger; the default covers every engine module
        level: Logging level name (defaults to config.log_level)
        logs_dir: Directory for the rotating log file (defaults to config.logs_dir)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Don't add handlers if logger already configured
    if logger.handlers:
        return logger

    level = level or config.log_level
    logs_dir = Path(logs_dir) if logs_dir is not None else config.logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = logs_dir / "climate_engine.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
