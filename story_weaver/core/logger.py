"""
Story Weaver - Logging System
Provides structured logging with file rotation and multiple log levels.
"""

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

# Create logs directory
LOGS_DIR = Path(os.getenv("STORY_WEAVER_LOGS_DIR", Path(__file__).resolve().parent.parent.parent / "logs"))
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Log format
DETAILED_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'
SIMPLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# =========================
# MAIN APPLICATION LOGGER
# =========================

def setup_logger():
    """Setup the main application logger with console and file handlers."""

    logger = logging.getLogger("story_weaver")
    logger.setLevel(logging.DEBUG)  # Capture all levels

    # Prevent duplicate handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    # --- Console Handler (INFO and above) ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    # --- Main App Log File (rotating, max 5MB, keep 5 backups) ---
    app_handler = RotatingFileHandler(
        LOGS_DIR / "app.log",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=5,
        encoding='utf-8'
    )
    app_handler.setLevel(logging.DEBUG)
    app_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(app_handler)

    # --- Error Log File (errors only) ---
    error_handler = RotatingFileHandler(
        LOGS_DIR / "error.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


# Initialize main logger
logger = setup_logger()


def get_logger(name: str) -> logging.Logger:
    """
    Returns a child logger (e.g. story_weaver.workbench).
    Inherits handlers from parent logger.
    """
    return logging.getLogger(f"story_weaver.{name}")


# =========================
# CONVENIENCE FUNCTIONS
# =========================

def log_generation_event(run_id: str, event: str, details: str = ""):
    """Log run lifecycle events (submit, outline ready, chapter written, reset...)."""
    run_logger = get_logger("run")
    run_logger.info(f"[Run:{run_id}] {event} | {details}")


def log_agent_action(agent_name: str, action: str, details: str = "", success: bool = True):
    """Log agent actions (outliner, writer)."""
    agent_logger = get_logger(f"agent.{agent_name}")
    status = "✓" if success else "✗"
    agent_logger.info(f"[{status}] {action} | {details}")


def log_error(message: str, error: Exception = None, context: dict = None):
    """Log error with optional exception and context."""
    error_logger = get_logger("error")
    context_str = ""
    if context:
        context_str = " | " + " | ".join(f"{k}={v}" for k, v in context.items())
    if error:
        error_logger.error(f"{message}: {str(error)}{context_str}", exc_info=error)
    else:
        error_logger.error(f"{message}{context_str}")
