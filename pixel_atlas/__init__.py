"""pixel-atlas - Sprite atlas compositing with edge extrusion."""

from .compositor import (EXTRUDE_SIZE, AtlasCompositor, Placement, blit,
                         extrude)
from .encoder import encode
from .errors import AtlasError, InvalidDimensions, UnsupportedFormat
from .pixel_buffer import CHANNELS, PixelBuffer
from .source_image import (AnimatedImage, SourceImage, StaticImage, from_pil,
                           load_image)

__all__ = [
    "AtlasCompositor",
    "Placement",
    "PixelBuffer",
    "SourceImage",
    "StaticImage",
    "AnimatedImage",
    "from_pil",
    "load_image",
    "blit",
    "extrude",
    "encode",
    "AtlasError",
    "InvalidDimensions",
    "UnsupportedFormat",
    "EXTRUDE_SIZE",
    "CHANNELS",
]
