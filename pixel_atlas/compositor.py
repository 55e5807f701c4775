"""AtlasCompositor - Places source images on a fixed-size atlas and exports it."""

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .encoder import encode
from .errors import UnsupportedFormat
from .pixel_buffer import PixelBuffer
from .source_image import SourceImage

logger = logging.getLogger(__name__)

EXTRUDE_SIZE = 4

Encoder = Callable[[PixelBuffer, str, dict], Any]


class Placement:
    """Source image placed at (x, y) in atlas coordinates."""

    def __init__(self, image: SourceImage, x: int, y: int):
        self.image = image
        self.x = x
        self.y = y

    def __repr__(self):
        return f"Placement({self.image.width}x{self.image.height} at {self.x},{self.y})"


def blit(image: SourceImage, x_offset: int, y_offset: int, buffer: PixelBuffer):
    """Copy frame 0 of image into buffer with its top-left at the offset."""
    buffer.paste(image.first_frame(), x_offset, y_offset)


def extrude(image: SourceImage, x_offset: int, y_offset: int, buffer: PixelBuffer, size: int):
    """
    Repeat the image's outermost rows and columns just outside its footprint.

    Each edge is copied one pixel outward: top row above, bottom row below,
    left column to the left, right column to the right. Diagonal corner
    pixels are left alone. `size` only switches the pass on (> 0); the band
    stays one pixel deep for any positive value.

    Callers must leave at least `size` pixels of padding between images,
    nothing here checks it. Writes past the buffer edge are dropped.
    """
    if size <= 0:
        return

    pixels = image.first_frame()
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        return

    buffer.paste(pixels[:1], x_offset, y_offset - 1)
    buffer.paste(pixels[-1:], x_offset, y_offset + image.height)
    buffer.paste(pixels[:, :1], x_offset - 1, y_offset)
    buffer.paste(pixels[:, -1:], x_offset + image.width, y_offset)


class AtlasCompositor:
    """
    Composites source images into one RGBA atlas.

    Placements are applied in insertion order, each one blitted and then
    extruded before the next, so a later image may cover an earlier
    image's extruded margin.
    """

    DEFAULT_FORMAT = "png"
    SUPPORTED_FORMATS = ("jpg", "jpeg", "png", "gif")
    EXTRUDE_SIZE = EXTRUDE_SIZE

    def __init__(self, width: int, height: int, extrude_size: int = EXTRUDE_SIZE):
        """
        Initialize compositor.

        Args:
            width: Atlas width in pixels
            height: Atlas height in pixels
            extrude_size: Edge extrusion margin; 0 disables extrusion
        """
        self.buffer = PixelBuffer(width, height)
        self.extrude_size = extrude_size
        self._placements: List[Placement] = []

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def placements(self) -> Tuple[Placement, ...]:
        return tuple(self._placements)

    def __len__(self):
        return len(self._placements)

    def add_placement(self, image: SourceImage, x: int, y: int) -> Placement:
        """
        Record image at offset (x, y).

        No bounds or overlap checks; anything outside the atlas is clipped
        when rendering.
        """
        placement = Placement(image, x, y)
        self._placements.append(placement)
        logger.debug("Added %r", placement)
        return placement

    def resolve_format(self, format: Optional[str]) -> str:
        """Normalise an export format name, defaulting to png. Case-insensitive: "PNG" is accepted."""
        resolved = (format or self.DEFAULT_FORMAT).lower()
        if resolved not in self.SUPPORTED_FORMATS:
            raise UnsupportedFormat(
                f'Cannot export "{format}". Please use one of: {", ".join(self.SUPPORTED_FORMATS)}'
            )
        return resolved

    def render(self, background: Optional[Sequence[int]] = None) -> PixelBuffer:
        """
        Fill, blit and extrude every placement into the atlas buffer.

        Args:
            background: Optional (r, g, b, a) fill; (r, g, b) is taken as opaque.
                        Without it the buffer keeps its current contents
                        (transparent black on a fresh compositor).
        """
        if background is not None:
            if len(background) == 3:
                background = tuple(background) + (255,)
            self.buffer.fill(background)

        for placement in self._placements:
            blit(placement.image, placement.x, placement.y, self.buffer)
            extrude(placement.image, placement.x, placement.y, self.buffer, self.extrude_size)

        return self.buffer

    def export(
        self,
        format: Optional[str] = None,
        background: Optional[Sequence[int]] = None,
        encoder: Optional[Encoder] = None,
        **options,
    ):
        """
        Render the atlas and hand it to the encoder.

        Args:
            format: jpg, jpeg, png or gif (default png), any letter case
            background: Optional RGBA fill applied before blitting; (r, g, b) gets alpha 255
            encoder: Callable (buffer, format, options); Pillow encoder by default
            **options: Passed through to the encoder (e.g. quality)

        Raises:
            UnsupportedFormat: Checked before the buffer or encoder is touched
        """
        resolved = self.resolve_format(format)
        buffer = self.render(background)
        logger.debug(
            "Exporting %dx%d atlas with %d placements as %s",
            self.width, self.height, len(self._placements), resolved,
        )
        return (encoder or encode)(buffer, resolved, options)
