"""
Logging configuration with file rotation and automatic cleanup.
Keeps logs for 10 days with daily rotation.
"""
import os
import logging
from logging.handlers import TimedRotatingFileHandler
from datetime import datetime, timedelta
from pathlib import Path

from config import Config


# Create logs directory
LOGS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "logs")

LOG_FILE = os.path.join(LOGS_DIR, "thumbcraft.log")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_RETENTION_DAYS = 10
ROOT_LOGGER_NAME = "thumbcraft"


def cleanup_old_logs(directory: str, retention_days: int = LOG_RETENTION_DAYS):
    """Remove rotated log files older than retention_days."""
    try:
        now = datetime.now()
        cutoff = now - timedelta(days=retention_days)

        log_dir = Path(directory)
        if not log_dir.exists():
            return

        deleted_count = 0
        for log_file in log_dir.glob("thumbcraft.log.*"):
            if not log_file.is_file():
                continue
            # Rotated files are named thumbcraft.log.YYYY-MM-DD
            try:
                date_str = log_file.name.replace("thumbcraft.log.", "")
                file_date = datetime.strptime(date_str, "%Y-%m-%d")
            except ValueError:
                file_date = datetime.fromtimestamp(log_file.stat().st_mtime)

            if file_date < cutoff:
                try:
                    log_file.unlink()
                    deleted_count += 1
                except OSError as e:
                    logging.error(f"Failed to delete log file {log_file.name}: {e}")

        if deleted_count > 0:
            logging.info(f"Cleaned up {deleted_count} old log file(s)")
    except Exception as e:
        logging.error(f"Error during log cleanup: {e}")


def setup_logger(name: str = ROOT_LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    Set up logger with file rotation and console output.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(level)

    if Config.LOG_TO_FILE:
        os.makedirs(LOGS_DIR, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            LOG_FILE,
            when="midnight",
            interval=1,
            backupCount=LOG_RETENTION_DAYS,
            encoding="utf-8",
            utc=True
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(file_handler)
        cleanup_old_logs(LOGS_DIR, LOG_RETENTION_DAYS)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", "%H:%M:%S")
    )
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (if None, returns the root application logger)

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# Create default application logger
app_logger = setup_logger(ROOT_LOGGER_NAME, getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

app_logger.info("=" * 80)
app_logger.info("Application logger initialized")
if Config.LOG_TO_FILE:
    app_logger.info(f"Log file: {LOG_FILE} (retention: {LOG_RETENTION_DAYS} days)")
app_logger.info("=" * 80)
