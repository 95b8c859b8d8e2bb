"""
Logging setup for code-executor.

stdout carries the MCP protocol, so console output always goes to stderr.
When a log directory is configured, rotating file logs are added:
- code_executor.log: Main log with 5MB rotation, keeps 3 backups
- code_executor.errors.log: Errors only, 2MB rotation, keeps 2 backups
- code_executor.json: Structured JSON, 5MB rotation, keeps 2 backups
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from code_executor.utils.path_utils import ensure_directory

PACKAGE_LOGGER = "code_executor"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    level: int = logging.INFO, log_dir: Optional[Path] = None
) -> logging.Logger:
    """
    Configure the package logger. Safe to call more than once.

    Logs to:
    - stderr (console) at ``level``
    - {log_dir}/code_executor.log (rotating, 5MB max, 3 backups)
    - {log_dir}/code_executor.errors.log (errors only, 2MB max, 2 backups)
    - {log_dir}/code_executor.json (structured JSON, 5MB max, 2 backups)

    Args:
        level: Console and logger level
        log_dir: Optional directory for rotating file logs

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    text_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(text_formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        # (filename, max MB, backups, level, formatter)
        log_files = [
            ("code_executor.log", 5, 3, logging.DEBUG, text_formatter),
            ("code_executor.errors.log", 2, 2, logging.ERROR, text_formatter),
            ("code_executor.json", 5, 2, logging.INFO, JsonFormatter()),
        ]
        try:
            log_dir = ensure_directory(Path(log_dir))
            for filename, max_mb, backups, file_level, formatter in log_files:
                file_handler = RotatingFileHandler(
                    log_dir / filename,
                    maxBytes=max_mb * 1024 * 1024,
                    backupCount=backups,
                    encoding="utf-8",
                )
                file_handler.setLevel(file_level)
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"File logging unavailable in {log_dir}: {e}")

    logger.setLevel(min(level, logging.DEBUG) if log_dir is not None else level)
    logger.propagate = False
    return logger
