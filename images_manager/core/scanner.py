"""Workspace image scanner."""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .error_handler import ErrorHandler
from .models import ImageFile, SUPPORTED_EXTENSIONS, normalize_extension
from .paths import PathResolver
from .workspace import require_workspace


class ImageScanner:
    """Walks a workspace tree and collects supported image files."""

    def __init__(self, progress_callback: Optional[Callable[[int, int], None]] = None):
        """
        Initialize the image scanner.

        Args:
            progress_callback: Optional callback function for progress reporting.
                               Called with (processed_count, total_count) parameters.
        """
        self.progress_callback = progress_callback
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def is_supported(file_path: Path) -> bool:
        """Check whether a file has a supported image extension."""
        return normalize_extension(file_path) in SUPPORTED_EXTENSIONS

    @staticmethod
    def is_hidden(relative_path: Path) -> bool:
        """Check whether any segment of a root-relative path starts with a dot."""
        return any(part.startswith(".") for part in relative_path.parts)

    @staticmethod
    def _links_outside(item: Path, real_root: Path) -> bool:
        return item.is_symlink() and real_root not in item.resolve().parents

    def scan(self, workspace_root) -> List[ImageFile]:
        """
        Scan a workspace for image files.

        The whole tree is enumerated before any record is built; the result is
        fully materialized. Order follows filesystem traversal and is not stable.

        Args:
            workspace_root: Workspace root directory

        Returns:
            One ImageFile per supported, non-hidden file

        Raises:
            WorkspaceNotFoundError: If the root does not exist
            PathNotDirectoryError: If the root is not a directory
            IOFailureError: If the root cannot be enumerated
        """
        root = require_workspace(workspace_root, "scan")

        try:
            items = list(root.glob("**/*"))
        except OSError as e:
            self.error_handler.handle_file_system_error(e, root, "scan")

        real_root = root.resolve()
        images = []
        skipped = []
        total = len(items)

        for processed, item in enumerate(items, start=1):
            relative = item.relative_to(root)
            if not self.is_hidden(relative) and self.is_supported(item):
                try:
                    if item.is_file() and not self._links_outside(item, real_root):
                        images.append(ImageFile.create(
                            item, PathResolver.to_relative(root, item), item.stat()
                        ))
                except OSError as e:
                    # File vanished or became unreadable since enumeration
                    skipped.append(e)
                    self.logger.warning(f"Skipping {item}: {e}")

            if self.progress_callback:
                try:
                    self.progress_callback(processed, total)
                except Exception as e:
                    self.logger.warning(f"Progress callback error: {e}")

        if skipped:
            self.error_handler.log_error_summary(skipped, f"scan of {root}")

        self.logger.info(f"Scan of {root} found {len(images)} images in {total} entries")
        return images
