"""
Helpers for data-URI encoded media.
"""
import base64
import mimetypes
import re
from pathlib import Path
from typing import Tuple, Union

DEFAULT_IMAGE_MIME_TYPE = "image/png"
IMAGE_MIME_PREFIX = "image/"

_IMAGE_DATA_URI_PREFIX = re.compile(r"^data:(image/[\w.+-]+);base64,")


def split_image_data_uri(reference_image: str) -> Tuple[str, str]:
    """
    Split ``data:<mime>;base64,<payload>`` into ``(mime_type, payload)``.

    A value without the prefix is returned as the payload unchanged, with
    the default ``image/png`` MIME type.
    """
    match = _IMAGE_DATA_URI_PREFIX.match(reference_image)
    if not match:
        return DEFAULT_IMAGE_MIME_TYPE, reference_image
    return match.group(1), reference_image[match.end():]


def image_file_to_data_uri(image_path: Union[str, Path]) -> str:
    """
    Encode a local image file as a data URI.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not recognisably an image
    """
    path = Path(image_path)
    if not path.is_file():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type or not mime_type.startswith(IMAGE_MIME_PREFIX):
        raise ValueError(f"Unsupported image type for {path.name}: {mime_type or 'unknown'}")

    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
