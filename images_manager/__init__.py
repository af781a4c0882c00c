"""Images Manager - workspace image indexing and organizing."""

__version__ = "0.1.0"
__author__ = "Images Manager Team"
__description__ = "Workspace file-indexing and mutation layer for an image organizer"

from .core.models import ImageFile, MoveRequest, RenameRequest, Workspace
from .core.scanner import ImageScanner
from .core.mutator import FileMutator
from .core.workspace import WorkspaceBootstrapper
from .core.paths import PathResolver
from .cli.main import cli

__all__ = [
    "ImageFile",
    "MoveRequest",
    "RenameRequest",
    "Workspace",
    "ImageScanner",
    "FileMutator",
    "WorkspaceBootstrapper",
    "PathResolver",
    "cli"
]
