"""Error handling utilities for filesystem operations."""

import errno
import logging
from pathlib import Path
from typing import Callable, List, Optional, Union
from functools import wraps

from .exceptions import (
    ImagesManagerError, IOFailureError, PathNotFoundError
)


logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized translation of OS errors into workspace errors."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger instance to use for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def handle_file_system_error(self, error: Exception, file_path: Union[str, Path],
                                 operation: str = "filesystem operation"):
        """
        Translate a file system error into a typed workspace error and raise it.

        Args:
            error: The exception that occurred
            file_path: Path where the error occurred
            operation: Name of the operation that failed

        Raises:
            PathNotFoundError: If the path vanished
            IOFailureError: For every other OS level failure
        """
        if isinstance(error, ImagesManagerError):
            raise error

        if isinstance(error, OSError):
            if error.errno == errno.ENOENT:
                self.logger.warning(f"{operation}: path not found: {file_path}")
                raise PathNotFoundError(
                    f"Path not found during {operation}: {file_path}",
                    path=file_path, operation=operation
                ) from error
            elif error.errno in (errno.EACCES, errno.EPERM):
                self.logger.warning(f"{operation}: permission denied: {file_path}")
                raise IOFailureError(
                    f"Permission denied during {operation}: {file_path}",
                    path=file_path, operation=operation
                ) from error
            elif error.errno == errno.ENOSPC:
                self.logger.error(f"{operation}: no space left on device: {error}")
                raise IOFailureError(
                    f"No space left on device during {operation}: {file_path}",
                    path=file_path, operation=operation
                ) from error
            elif error.errno == errno.EXDEV:
                self.logger.error(f"{operation}: cross-device rename refused: {file_path}")
                raise IOFailureError(
                    f"Cannot {operation} across filesystems or volumes: {file_path}",
                    path=file_path, operation=operation
                ) from error
            else:
                self.logger.error(f"{operation}: file system error at {file_path}: {error}")
                raise IOFailureError(
                    f"File system error during {operation} at {file_path}: {error}",
                    path=file_path, operation=operation
                ) from error

        self.logger.error(f"Unexpected error during {operation}: {error}")
        raise IOFailureError(
            f"Unexpected error during {operation}: {error}",
            path=file_path, operation=operation
        ) from error

    def log_error_summary(self, errors: List[Exception], operation: str = "operation"):
        """
        Log a summary of errors that occurred during an operation.

        Args:
            errors: List of exceptions that occurred
            operation: Description of the operation
        """
        if not errors:
            return

        error_counts = {}
        for error in errors:
            error_type = type(error).__name__
            error_counts[error_type] = error_counts.get(error_type, 0) + 1

        self.logger.warning(f"Error summary for {operation}:")
        for error_type, count in error_counts.items():
            self.logger.warning(f"  {error_type}: {count} occurrences")

        unique_messages = set()
        for error in errors[:10]:
            message = str(error)
            if message not in unique_messages:
                unique_messages.add(message)
                self.logger.warning(f"  Example: {message}")


def safe_path_operation(operation: str) -> Callable:
    """
    Decorator routing OS errors raised by a path operation through ErrorHandler.

    The first str or Path positional argument after ``self`` is reported as
    the failing path.

    Args:
        operation: Name of the operation for error messages
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ImagesManagerError:
                raise
            except OSError as e:
                file_path = e.filename
                if file_path is None:
                    for arg in args:
                        if isinstance(arg, (str, Path)):
                            file_path = arg
                            break
                return ErrorHandler().handle_file_system_error(e, file_path or "unknown", operation)

        return wrapper
    return decorator
