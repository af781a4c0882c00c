"""Move, rename and delete operations against a workspace tree.

Every operation re-validates the workspace and the file it targets against
the live filesystem; nothing from an earlier scan is trusted. Renames are a
single ``os.rename`` call, so a move never copies and then deletes. Moving
across a mount point inside the workspace fails with an IOFailureError
instead.
"""

import logging
import os
from pathlib import Path, PurePosixPath

from .error_handler import ErrorHandler
from .exceptions import (
    InvalidPathError, IOFailureError, SourceMissingError, TargetExistsError
)
from .models import MoveRequest, RenameRequest
from .paths import PathResolver
from .workspace import require_workspace


AUDIT_LOGGER_NAME = "images_manager.audit"


def _is_same_file(first: Path, second: Path) -> bool:
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


class FileMutator:
    """Applies one file mutation at a time to a workspace."""

    def __init__(self):
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)
        self.audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)

    def move(self, request: MoveRequest) -> str:
        """
        Relocate a file, possibly across subdirectories, within its workspace.

        Missing ancestor directories of the destination are created first.

        Returns:
            The new relative path, recomputed from the workspace root

        Raises:
            SourceMissingError: If the old path is not an existing file
            TargetExistsError: If another file already occupies the new path
            InvalidPathError: If either path escapes the workspace
            IOFailureError: If the filesystem refuses the operation
        """
        root = require_workspace(request.workspace_path, "move")
        old_abs = PathResolver.to_absolute(root, request.old_path)
        new_abs = PathResolver.to_absolute(root, request.new_path)

        if not old_abs.is_file():
            raise SourceMissingError(
                f"Source file does not exist: {request.old_path}",
                path=request.old_path, operation="move"
            )

        if old_abs == new_abs:
            return PathResolver.to_relative(root, new_abs)

        if os.path.lexists(new_abs) and not _is_same_file(old_abs, new_abs):
            raise TargetExistsError(
                f"Target already exists: {request.new_path}",
                path=request.new_path, operation="move"
            )

        try:
            new_abs.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.error_handler.handle_file_system_error(e, new_abs.parent, "move")

        self._rename(old_abs, new_abs, "move")

        new_relative = PathResolver.to_relative(root, new_abs)
        self.audit_logger.info(f"MOVE {root}: {request.old_path} -> {new_relative}")
        return new_relative

    def rename(self, request: RenameRequest) -> str:
        """
        Change the base name of a file, keeping its directory.

        Returns:
            The new relative path, recomputed from the workspace root

        Raises:
            InvalidPathError: If the relative path is empty or a name is not a bare file name
            SourceMissingError: If the old file does not exist
            TargetExistsError: If a file with the new name already exists
        """
        root = require_workspace(request.workspace_path, "rename")

        relative = PathResolver.normalize_separators(request.relative_path).strip("/")
        if not relative:
            raise InvalidPathError(
                f"Relative path has no parent directory: {request.relative_path!r}",
                path=request.relative_path, operation="rename"
            )
        self._check_file_name(request.old_name)
        self._check_file_name(request.new_name)

        directory = PathResolver.to_absolute(root, str(PurePosixPath(relative).parent))
        old_abs = directory / request.old_name
        new_abs = directory / request.new_name

        if not old_abs.is_file():
            raise SourceMissingError(
                f"File does not exist: {PathResolver.to_relative(root, old_abs)}",
                path=old_abs, operation="rename"
            )

        if old_abs == new_abs:
            return PathResolver.to_relative(root, new_abs)

        # Case-only renames on case-insensitive filesystems see the file itself
        if os.path.lexists(new_abs) and not _is_same_file(old_abs, new_abs):
            raise TargetExistsError(
                f"A file named {request.new_name} already exists in this folder",
                path=new_abs, operation="rename"
            )

        self._rename(old_abs, new_abs, "rename")

        new_relative = PathResolver.to_relative(root, new_abs)
        self.audit_logger.info(
            f"RENAME {root}: {PathResolver.to_relative(root, old_abs)} -> {new_relative}"
        )
        return new_relative

    def delete(self, relative_path: str, workspace_root) -> bool:
        """
        Permanently remove a file. There is no recycle bin and no undo.

        Raises:
            SourceMissingError: If the file does not exist
        """
        root = require_workspace(workspace_root, "delete")
        target = PathResolver.to_absolute(root, relative_path)

        if not target.is_file():
            raise SourceMissingError(
                f"File does not exist: {relative_path}",
                path=relative_path, operation="delete"
            )

        try:
            target.unlink()
        except FileNotFoundError:
            raise SourceMissingError(
                f"File does not exist: {relative_path}",
                path=relative_path, operation="delete"
            ) from None
        except OSError as e:
            self.error_handler.handle_file_system_error(e, target, "delete")

        self.audit_logger.info(f"DELETE {root}: {PathResolver.to_relative(root, target)}")
        return True

    def _rename(self, source: Path, destination: Path, operation: str):
        try:
            source.rename(destination)
        except FileNotFoundError:
            # Source removed after validation
            if not source.exists():
                raise SourceMissingError(
                    f"Source file disappeared during {operation}: {source}",
                    path=source, operation=operation
                ) from None
            raise IOFailureError(
                f"Destination directory missing during {operation}: {destination.parent}",
                path=destination, operation=operation
            ) from None
        except FileExistsError:
            raise TargetExistsError(
                f"Target already exists: {destination}", path=destination, operation=operation
            ) from None
        except OSError as e:
            self.error_handler.handle_file_system_error(e, f"{source} -> {destination}", operation)

    @staticmethod
    def _check_file_name(name: str):
        if (not name or name in (".", "..") or name.startswith(".")
                or "/" in name or os.sep in name or (os.altsep and os.altsep in name)):
            raise InvalidPathError(
                f"Not a valid file name: {name!r}", path=name, operation="rename"
            )
