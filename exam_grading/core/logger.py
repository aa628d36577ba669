"""
Logging utilities for the exam grading engine.
"""
import logging
import sys
from datetime import datetime
from typing import Optional
from ..config import settings


def setup_logger(name: str, log_file: str = None, level=logging.INFO) -> logging.Logger:
    """
    Setup logger with console and optional file handlers

    Args:
        name: Logger name
        log_file: Optional log file name, written under settings.LOGS_DIR
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (if log_file specified)
    if log_file:
        settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        log_path = settings.LOGS_DIR / log_file
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _dated_log_file(prefix: str) -> Optional[str]:
    if not settings.LOG_TO_FILE:
        return None
    return f'{prefix}_{datetime.now().strftime("%Y%m%d")}.log'


_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

# Grading logger, parent of the engine's module loggers
grading_logger = setup_logger(
    'exam_grading.grader',
    _dated_log_file('grading'),
    _level
)

# Default logger for general use
logger = setup_logger(
    'exam_grading.app',
    _dated_log_file('app'),
    _level
)
