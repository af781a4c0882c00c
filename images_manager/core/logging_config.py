"""Logging configuration and utilities for Images Manager."""

import logging
import logging.handlers
import platform
import sys
from pathlib import Path
from typing import Optional

from .config import LoggingConfig, get_config
from .mutator import AUDIT_LOGGER_NAME


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Format log record with a colored level name."""
        original_levelname = record.levelname
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class LoggingManager:
    """Manages logging configuration and setup."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        """
        Initialize logging manager.

        Args:
            config: Logging configuration. If None, uses global config.
        """
        self.config = config or get_config().logging
        self.handlers = {}
        self._setup_root_logger()

    def _setup_root_logger(self):
        """Set up the root logger with configured handlers."""
        root_logger = logging.getLogger()

        for handler in list(root_logger.handlers):
            if handler in self.handlers.values() or getattr(handler, '_images_manager', False):
                root_logger.removeHandler(handler)

        log_level = getattr(logging, self.config.level.upper(), None)
        if not isinstance(log_level, int):
            root_logger.setLevel(logging.INFO)
            root_logger.warning(f"Invalid log level '{self.config.level}', using INFO")
        else:
            root_logger.setLevel(log_level)

        if self.config.console_enabled:
            self.add_handler('console', self._create_console_handler())

        if self.config.file_enabled and self.config.file_path:
            file_handler = self._create_file_handler()
            if file_handler:
                self.add_handler('file', file_handler)

    def _create_console_handler(self) -> logging.Handler:
        """Create a colored stderr handler."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(self.config.format))
        return handler

    def _create_file_handler(self) -> Optional[logging.Handler]:
        """Create and configure rotating file handler."""
        try:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)

            max_bytes = self.config.file_max_size_mb * 1024 * 1024
            handler = logging.handlers.RotatingFileHandler(
                self.config.file_path,
                maxBytes=max_bytes,
                backupCount=self.config.file_backup_count
            )
            handler.setFormatter(logging.Formatter(self.config.format))
            return handler

        except OSError as e:
            logging.getLogger(__name__).error(f"Failed to create file handler: {e}")
            return None

    def add_handler(self, name: str, handler: logging.Handler):
        """
        Add a named handler to the root logger.

        Args:
            name: Handler name for reference
            handler: Handler instance to add
        """
        handler._images_manager = True
        logging.getLogger().addHandler(handler)
        self.handlers[name] = handler

    def remove_handler(self, name: str):
        """Remove a named handler from the root logger."""
        if name in self.handlers:
            handler = self.handlers.pop(name)
            logging.getLogger().removeHandler(handler)
            handler.close()

    def set_level(self, level: str):
        """
        Set the logging level for all loggers.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        log_level = getattr(logging, level.upper(), None)
        if not isinstance(log_level, int):
            logging.getLogger(__name__).error(f"Invalid log level: {level}")
            return

        logging.getLogger().setLevel(log_level)
        self.config.level = level.upper()

    def enable_debug_logging(self):
        """Enable debug logging with source locations."""
        self.set_level('DEBUG')

        debug_format = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s'

        for handler in self.handlers.values():
            if isinstance(handler, logging.handlers.RotatingFileHandler):
                handler.setFormatter(logging.Formatter(debug_format))
            else:
                handler.setFormatter(ColoredFormatter(debug_format))

    def create_audit_logger(self) -> logging.Logger:
        """
        Attach a separate audit.log beside the application log to the logger
        that records file mutations.

        Returns:
            Audit logger instance
        """
        audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
        audit_logger.setLevel(logging.INFO)

        if 'audit' in self.handlers:
            return audit_logger

        audit_file = self.config.file_path.parent / 'audit.log'

        try:
            audit_file.parent.mkdir(parents=True, exist_ok=True)
            audit_handler = logging.handlers.RotatingFileHandler(
                audit_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            )
            audit_handler.setFormatter(logging.Formatter('%(asctime)s - AUDIT - %(message)s'))

            audit_logger.addHandler(audit_handler)
            audit_logger.propagate = False
            self.handlers['audit'] = audit_handler

        except OSError as e:
            logging.getLogger(__name__).error(f"Failed to create audit logger: {e}")

        return audit_logger

    def log_system_info(self):
        """Log system information for debugging."""
        logger = logging.getLogger(__name__)
        logger.info("=== System Information ===")
        logger.info(f"Platform: {platform.platform()}")
        logger.info(f"Python version: {sys.version}")
        logger.info(f"Working directory: {Path.cwd()}")
        logger.info(f"Log file: {self.config.file_path}")
        logger.info("=== End System Information ===")


# Global logging manager instance
_logging_manager = None


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Set up global logging configuration.

    Args:
        config: Optional logging configuration

    Returns:
        LoggingManager instance
    """
    global _logging_manager
    if _logging_manager is not None:
        for name in list(_logging_manager.handlers):
            if name == 'audit':
                audit_handler = _logging_manager.handlers.pop(name)
                audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
                audit_logger.removeHandler(audit_handler)
                audit_logger.propagate = True
                audit_handler.close()
            else:
                _logging_manager.remove_handler(name)
    _logging_manager = LoggingManager(config)
    return _logging_manager
