# core/logging_config.py

import logging
import os
from typing import Optional

from concurrent_log_handler import ConcurrentRotatingFileHandler

from .config import Settings, settings as default_settings

def setup_logging(app_settings: Optional[Settings] = None) -> logging.Logger:
    """Configure root logger with console output and optional file rotation"""
    app_settings = app_settings or default_settings

    root_logger = logging.getLogger()
    root_logger.setLevel(app_settings.log_level)

    # Clear any existing handlers to avoid duplicates on reload
    root_logger.handlers.clear()

    formatter = logging.Formatter(app_settings.log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if app_settings.log_file:
        log_dir = os.path.dirname(app_settings.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = ConcurrentRotatingFileHandler(
            app_settings.log_file,
            maxBytes=app_settings.log_max_bytes,
            backupCount=app_settings.log_backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.info(f"📝 Logging to file: {app_settings.log_file}")

    return root_logger
