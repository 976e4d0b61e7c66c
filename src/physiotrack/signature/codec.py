from __future__ import annotations

import base64
import binascii
import io
import re

from PIL import Image

from ..core.exceptions import ValidationError

PNG_DATA_URL_PREFIX = "data:image/png;base64,"

_DATA_URL_RE = re.compile(r"^data:(image/[A-Za-z0-9.+-]+);base64,(.*)$", re.DOTALL)


def encode_png(image: Image.Image) -> str:
    """Encode a Pillow image as a PNG data URI (what a canvas' toDataURL() returns)."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return PNG_DATA_URL_PREFIX + base64.b64encode(buf.getvalue()).decode("ascii")


def decode_data_url(data_url: str) -> Image.Image:
    if not isinstance(data_url, str):
        raise ValidationError("Signature must be an image data URI.")
    match = _DATA_URL_RE.match(data_url)
    if not match:
        raise ValidationError("Signature must be an image data URI.")

    try:
        raw = base64.b64decode(match.group(2), validate=True)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, ValueError, OSError) as e:
        raise ValidationError("Signature image could not be decoded.") from e
    return image


def is_image_data_url(data_url: str) -> bool:
    try:
        decode_data_url(data_url)
    except ValidationError:
        return False
    return True
