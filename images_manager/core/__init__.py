"""Workspace file-indexing and mutation core."""

from .models import ImageFile, MoveRequest, RenameRequest, Workspace, SUPPORTED_EXTENSIONS
from .paths import PathResolver
from .scanner import ImageScanner
from .mutator import FileMutator
from .workspace import WorkspaceBootstrapper, validate_workspace_path, workspace_name_from_path
from .image_access import image_absolute_path, image_as_data_url

__all__ = [
    "ImageFile",
    "MoveRequest",
    "RenameRequest",
    "Workspace",
    "SUPPORTED_EXTENSIONS",
    "PathResolver",
    "ImageScanner",
    "FileMutator",
    "WorkspaceBootstrapper",
    "validate_workspace_path",
    "workspace_name_from_path",
    "image_absolute_path",
    "image_as_data_url",
]
