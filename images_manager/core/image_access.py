"""Read access to individual workspace images."""

import base64
import mimetypes

from .error_handler import safe_path_operation
from .exceptions import PathNotFoundError
from .paths import PathResolver
from .workspace import require_workspace


MIME_OVERRIDES = {
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "bmp": "image/bmp",
}


def _existing_image(relative_path: str, workspace_root, operation: str):
    root = require_workspace(workspace_root, operation)
    image_path = PathResolver.to_absolute(root, relative_path)
    if not image_path.is_file():
        raise PathNotFoundError(
            f"Image file does not exist: {relative_path}", path=relative_path, operation=operation
        )
    return image_path


def image_absolute_path(relative_path: str, workspace_root) -> str:
    """Return the absolute, host-native path of an existing workspace image."""
    return str(_existing_image(relative_path, workspace_root, "absolute path"))


@safe_path_operation("read image")
def image_as_data_url(relative_path: str, workspace_root) -> str:
    """Read an image and encode it as a ``data:`` URL for direct display."""
    image_path = _existing_image(relative_path, workspace_root, "read image")

    extension = image_path.suffix.lower().lstrip(".")
    mime_type = MIME_OVERRIDES.get(extension) or mimetypes.guess_type(image_path.name)[0]
    payload = base64.b64encode(image_path.read_bytes()).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{payload}"
