"""
Logging Configuration
Sets up centralized logging for the application, writing to both console and file.
"""

import os
import sys
import logging
import logging.config
from pathlib import Path


def setup_logging(log_dir: str = "/var/log/catalog-manager", log_level: str = "INFO"):
    """
    Configure logging for the application.

    Args:
        log_dir: Directory to store log files.
        log_level: Logging level (default: INFO)
    """
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    log_file_path = os.path.join(log_dir, "app.log")
    log_level = log_level.upper()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
                "level": log_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file_path,
                "maxBytes": 10 * 1024 * 1024,  # 10 MB
                "backupCount": 5,
                "formatter": "default",
                "level": log_level,
                "encoding": "utf8",
            },
        },
        "loggers": {
            "": {  # Root logger
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": True,
            },
            "uvicorn": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "handlers": ["console", "file"],
                "level": "WARNING",
                "propagate": False,
            },
            # passlib warns on newer bcrypt builds
            "passlib": {
                "handlers": ["console", "file"],
                "level": "ERROR",
                "propagate": False,
            },
            "aiosqlite": {
                "handlers": ["console", "file"],
                "level": "WARNING",
                "propagate": False,
            },
            "app": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)

    logger = logging.getLogger("app")
    logger.info(f"Logging initialized at {log_level}. Writing logs to {log_file_path}")
