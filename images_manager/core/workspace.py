"""Workspace validation and control-directory bootstrap."""

import logging
from pathlib import Path

from .error_handler import safe_path_operation
from .exceptions import (
    InvalidPathError, PathNotDirectoryError, PathNotFoundError, WorkspaceNotFoundError
)
from .models import CONTROL_DIR_NAME, DATABASE_NAME, Workspace


logger = logging.getLogger(__name__)


def validate_workspace_path(path) -> Path:
    """
    Check that ``path`` is an existing directory.

    Raises:
        PathNotFoundError: If the path does not exist
        PathNotDirectoryError: If the path is not a directory
    """
    if not str(path).strip():
        raise PathNotFoundError("Path is empty", path=path, operation="validate")
    workspace_path = Path(path)
    if not workspace_path.exists():
        raise PathNotFoundError(f"Path does not exist: {path}", path=path, operation="validate")
    if not workspace_path.is_dir():
        raise PathNotDirectoryError(f"Path is not a directory: {path}", path=path, operation="validate")
    return workspace_path


def require_workspace(root, operation: str) -> Path:
    """Like validate_workspace_path, but a missing root is a WorkspaceNotFoundError."""
    if not str(root).strip():
        raise WorkspaceNotFoundError("Workspace path is empty", path=root, operation=operation)
    workspace_path = Path(root)
    if not workspace_path.exists():
        raise WorkspaceNotFoundError(
            f"Workspace directory does not exist: {root}", path=root, operation=operation
        )
    if not workspace_path.is_dir():
        raise PathNotDirectoryError(
            f"Workspace path is not a directory: {root}", path=root, operation=operation
        )
    return workspace_path


def workspace_name_from_path(path) -> str:
    """Return the last component of a workspace path as its display name."""
    name = Path(path).name
    if not name:
        raise InvalidPathError(
            f"Could not extract workspace name from path: {path}", path=path, operation="name"
        )
    return name


class WorkspaceBootstrapper:
    """Ensures the hidden control directory of a workspace exists."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @safe_path_operation("ensure workspace structure")
    def ensure_structure(self, workspace_root) -> str:
        """
        Create ``<root>/.im_settings`` if it is missing.

        Safe to call every session: an existing control directory and its
        contents are left untouched.

        Returns:
            Path where the companion workspace database is expected to live
        """
        root = require_workspace(workspace_root, "ensure workspace structure")
        settings_dir = root / CONTROL_DIR_NAME

        if not settings_dir.is_dir():
            settings_dir.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"Created control directory {settings_dir}")

        return str(settings_dir / DATABASE_NAME)

    def open_workspace(self, path) -> Workspace:
        """Validate a directory, derive its name and prepare its control directory."""
        workspace_path = validate_workspace_path(path)
        name = workspace_name_from_path(workspace_path.resolve())
        self.ensure_structure(workspace_path)

        workspace = Workspace(name=name, absolute_path=str(workspace_path.resolve()))
        self.logger.info(f"Workspace opened: {workspace.name} ({workspace.absolute_path})")
        return workspace
