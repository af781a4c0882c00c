"""Core data models for the Images Manager workspace core."""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional


SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset({
    "jpg",
    "jpeg",
    "png",
    "gif",
    "bmp",
    "webp",
    "tiff",
    "svg",
})

# Hidden control directory inside every workspace and the database it houses
CONTROL_DIR_NAME = ".im_settings"
DATABASE_NAME = "workspace.db"


def normalize_extension(path) -> str:
    """Return the lowercased extension of a path without its leading dot."""
    return Path(path).suffix.lower().lstrip(".")


@dataclass
class Workspace:
    """A user-designated directory tree. Timestamps are carried, not authored."""
    name: str
    absolute_path: str
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "absolute_path": self.absolute_path,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class ImageFile:
    """Snapshot of an image discovered in a workspace."""
    name: str
    relative_path: str
    file_size: int
    created_at: datetime
    modified_at: datetime
    extension: str

    @classmethod
    def create(cls, file_path: Path, relative_path: str,
               stat: Optional[os.stat_result] = None) -> "ImageFile":
        """
        Create an ImageFile from a path on disk.

        Birth time is used for ``created_at`` where the platform exposes it;
        otherwise the current time is substituted.
        """
        stat = stat or file_path.stat()
        birth_time = getattr(stat, "st_birthtime", None)
        if birth_time is not None:
            created_at = datetime.fromtimestamp(birth_time, tz=timezone.utc)
        else:
            created_at = datetime.now(timezone.utc)

        return cls(
            name=file_path.name,
            relative_path=relative_path,
            file_size=stat.st_size,
            created_at=created_at,
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            extension=normalize_extension(file_path),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with RFC 3339 timestamps."""
        return {
            "name": self.name,
            "relative_path": self.relative_path,
            "file_size": self.file_size,
            "created_at": self.created_at.isoformat(),
            "modified_at": self.modified_at.isoformat(),
            "extension": self.extension,
        }


@dataclass
class MoveRequest:
    """Intent to relocate a file within one workspace."""
    old_path: str
    new_path: str
    workspace_path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MoveRequest":
        return cls(data["old_path"], data["new_path"], data["workspace_path"])


@dataclass
class RenameRequest:
    """Intent to change only the base name of a file."""
    old_name: str
    new_name: str
    relative_path: str
    workspace_path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenameRequest":
        return cls(data["old_name"], data["new_name"], data["relative_path"], data["workspace_path"])
