"""Turn a local image into a data URL the API accepts."""

import base64
from pathlib import Path

from yuchi.errors import ImageError

MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def image_to_data_url(image_path: str) -> str:
    """Read a PNG or JPEG file and return `data:<mime>;base64,<bytes>`."""
    path = Path(image_path)
    if not path.exists() or not path.is_file():
        raise ImageError(f"Image file '{image_path}' does not exist or is not a file")

    mime_type = MIME_TYPES.get(path.suffix)
    if mime_type is None:
        raise ImageError(f"Unsupported image format for '{image_path}'. Use PNG or JPEG.")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageError(f"Failed to read image file '{image_path}': {e}") from e

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
