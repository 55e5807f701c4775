"""Pillow-backed encoder turning a finished PixelBuffer into file bytes."""

import io
import logging
from typing import Any, Dict, Optional

from .errors import UnsupportedFormat
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

# Export format name -> Pillow format name
PIL_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "gif": "GIF",
}

DEFAULT_JPEG_QUALITY = 75


def encode(buffer: PixelBuffer, format: str = "png", options: Optional[Dict[str, Any]] = None) -> bytes:
    """
    Encode buffer as PNG, JPEG or GIF bytes.

    Args:
        buffer: Composited atlas
        format: One of png, jpg, jpeg, gif
        options: Extra encoder settings; `quality` applies to JPEG

    Raises:
        UnsupportedFormat: format is not one of the above
    """
    options = options or {}
    pil_format = PIL_FORMATS.get(format.lower())
    if pil_format is None:
        raise UnsupportedFormat(
            f'Cannot encode "{format}". Please use one of: {", ".join(PIL_FORMATS)}'
        )

    image = buffer.to_image()
    save_kwargs = {}
    if pil_format == "JPEG":
        # JPEG has no alpha channel
        image = image.convert("RGB")
        save_kwargs["quality"] = int(options.get("quality", DEFAULT_JPEG_QUALITY))

    stream = io.BytesIO()
    image.save(stream, format=pil_format, **save_kwargs)
    data = stream.getvalue()
    logger.debug("Encoded %dx%d atlas as %s (%d bytes)", buffer.width, buffer.height, pil_format, len(data))
    return data
