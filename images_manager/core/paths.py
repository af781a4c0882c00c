"""Translation between workspace-relative and absolute paths.

Relative paths crossing the core's boundary are always rendered with ``/``
separators, no leading slash, so they stay portable between operating
systems. Absolute paths are returned in the host's native form.
"""

import os
from pathlib import Path, PurePosixPath
from typing import Union

from .exceptions import InvalidPathError

PathLike = Union[str, Path]


class PathResolver:
    """Converts between workspace-relative and absolute paths. No side effects."""

    @staticmethod
    def normalize_separators(path: PathLike) -> str:
        """Render every separator in ``path`` as ``/``."""
        text = str(path)
        if os.sep != "/":
            text = text.replace(os.sep, "/")
        if os.altsep and os.altsep != "/":
            text = text.replace(os.altsep, "/")
        return text

    @staticmethod
    def to_absolute(root: PathLike, relative: str) -> Path:
        """
        Join a workspace-relative path onto its root.

        Args:
            root: Workspace root directory
            relative: ``/``-separated path relative to the root

        Returns:
            Absolute path below the root

        Raises:
            InvalidPathError: If ``relative`` is absolute or escapes the root,
                either through ``..`` or through a symbolic link
        """
        relative_posix = PurePosixPath(PathResolver.normalize_separators(relative))
        if relative_posix.is_absolute() or Path(relative).is_absolute():
            raise InvalidPathError(
                f"Expected a workspace-relative path, got: {relative}",
                path=relative, operation="resolve"
            )

        root_path = Path(os.path.normpath(os.path.abspath(root)))
        candidate = Path(os.path.normpath(root_path.joinpath(*relative_posix.parts)))

        if candidate != root_path and root_path not in candidate.parents:
            raise InvalidPathError(
                f"Path escapes the workspace root: {relative}",
                path=relative, operation="resolve"
            )

        # Symlinked directories inside the root must not lead out of it
        real_root = root_path.resolve()
        real_candidate = candidate.resolve()
        if real_candidate != real_root and real_root not in real_candidate.parents:
            raise InvalidPathError(
                f"Path leaves the workspace root through a link: {relative}",
                path=relative, operation="resolve"
            )
        return candidate

    @staticmethod
    def to_relative(root: PathLike, absolute: PathLike) -> str:
        """
        Express an absolute path relative to its workspace root.

        Raises:
            InvalidPathError: If ``absolute`` is not inside ``root``
        """
        root_path = Path(os.path.normpath(os.path.abspath(root)))
        absolute_path = Path(os.path.normpath(os.path.abspath(absolute)))
        try:
            relative = absolute_path.relative_to(root_path)
        except ValueError:
            raise InvalidPathError(
                f"Path {absolute} is not inside workspace {root}",
                path=absolute, operation="relativize"
            ) from None

        if relative == Path("."):
            return ""
        return relative.as_posix()


to_absolute = PathResolver.to_absolute
to_relative = PathResolver.to_relative
normalize_separators = PathResolver.normalize_separators
