"""Custom exceptions for the Images Manager workspace core."""

from enum import Enum


class ErrorKind(Enum):
    """Tag identifying the kind of failure an exception represents."""
    WORKSPACE_NOT_FOUND = "WorkspaceNotFound"
    PATH_NOT_FOUND = "PathNotFound"
    NOT_A_DIRECTORY = "NotADirectory"
    SOURCE_MISSING = "SourceMissing"
    TARGET_EXISTS = "TargetExists"
    INVALID_PATH = "InvalidPath"
    IO_FAILURE = "IOFailure"
    INVALID_REQUEST = "InvalidRequest"


class ImagesManagerError(Exception):
    """Base exception for workspace errors."""

    kind = ErrorKind.IO_FAILURE

    def __init__(self, message, path=None, operation=None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None
        self.operation = operation

    def to_dict(self):
        """Serialize the error for API responses."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "path": self.path,
            "operation": self.operation,
        }


class FileSystemError(ImagesManagerError):
    """Exception for file system related errors."""
    pass


class PathNotFoundError(FileSystemError):
    """Exception for path not found errors."""
    kind = ErrorKind.PATH_NOT_FOUND


class WorkspaceNotFoundError(PathNotFoundError):
    """The workspace root does not exist."""
    kind = ErrorKind.WORKSPACE_NOT_FOUND


class SourceMissingError(PathNotFoundError):
    """The file a move, rename or delete targets does not exist."""
    kind = ErrorKind.SOURCE_MISSING


class PathNotDirectoryError(FileSystemError):
    """The path exists but is not a directory."""
    kind = ErrorKind.NOT_A_DIRECTORY


class TargetExistsError(FileSystemError):
    """The destination of a move or rename is already occupied."""
    kind = ErrorKind.TARGET_EXISTS


class IOFailureError(FileSystemError):
    """An underlying filesystem call failed."""
    kind = ErrorKind.IO_FAILURE


class ValidationError(ImagesManagerError):
    """Exception for malformed input."""
    kind = ErrorKind.INVALID_REQUEST


class InvalidPathError(ValidationError):
    """A path cannot be expressed relative to its workspace root."""
    kind = ErrorKind.INVALID_PATH
