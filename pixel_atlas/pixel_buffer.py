"""PixelBuffer - Fixed-size RGBA pixel store."""

import numpy as np
from PIL import Image
from typing import Sequence, Tuple

from .errors import InvalidDimensions

CHANNELS = 4


class PixelBuffer:
    """
    Fixed-size RGBA pixel buffer using numpy.

    Addressed as (x, y, channel). Writes outside the buffer are dropped
    silently instead of raising, so callers can blit and extrude across
    the atlas edge without bounds checks of their own.
    """

    def __init__(self, width: int, height: int):
        if not all(isinstance(v, (int, np.integer)) and not isinstance(v, (bool, np.bool_))
                   for v in (width, height)):
            raise InvalidDimensions(f"Buffer size must be integers, got {width!r}x{height!r}")
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Buffer size must be positive, got {width}x{height}")
        if int(width) * int(height) * CHANNELS > np.iinfo(np.intp).max:
            raise InvalidDimensions(f"Buffer size {width}x{height} is too large to allocate")

        self.width = int(width)
        self.height = int(height)
        # Shape: (height, width, 4), RGBA, uint8, zero = transparent black
        self.data = np.zeros((self.height, self.width, CHANNELS), dtype=np.uint8)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int, c: int) -> int:
        """Get channel c of pixel (x, y). Raises IndexError out of range."""
        if not self._contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return int(self.data[y, x, c])

    def set(self, x: int, y: int, c: int, value: int):
        """Set channel c of pixel (x, y), clamped to 0-255. No-op out of range."""
        if self._contains(x, y):
            self.data[y, x, c] = min(max(int(value), 0), 255)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Get pixel color at (x, y) as (r, g, b, a)."""
        if self._contains(x, y):
            return tuple(int(v) for v in self.data[y, x])
        return (0, 0, 0, 0)

    def fill(self, rgba: Sequence[int]):
        """Set every pixel to the (r, g, b, a) pattern."""
        if len(rgba) != CHANNELS:
            raise ValueError(f"Fill color needs {CHANNELS} channels, got {len(rgba)}")
        self.data[:, :] = np.clip(np.asarray(rgba, dtype=np.int64), 0, 255)

    def paste(self, pixels: np.ndarray, x: int, y: int):
        """
        Copy a (rows, cols, 4) array with its top-left corner at (x, y).

        Straight copy, no blending. Parts falling outside the buffer are
        clipped, which gives the same result as calling set() for every
        value.
        """
        rows, cols = pixels.shape[:2]

        # Calculate visible region
        src_x_start = max(0, -x)
        src_y_start = max(0, -y)
        src_x_end = min(cols, self.width - x)
        src_y_end = min(rows, self.height - y)

        # Nothing to copy if completely out of bounds
        if src_x_start >= src_x_end or src_y_start >= src_y_end:
            return

        dst_x_start = max(0, x)
        dst_y_start = max(0, y)
        dst_x_end = dst_x_start + (src_x_end - src_x_start)
        dst_y_end = dst_y_start + (src_y_end - src_y_start)

        region = pixels[src_y_start:src_y_end, src_x_start:src_x_end]
        if region.dtype != np.uint8:
            region = np.clip(region, 0, 255)
        self.data[dst_y_start:dst_y_end, dst_x_start:dst_x_end] = region

    def copy(self) -> 'PixelBuffer':
        """Create a copy of this buffer."""
        new_buffer = PixelBuffer(self.width, self.height)
        new_buffer.data = self.data.copy()
        return new_buffer

    def tobytes(self) -> bytes:
        """Raw RGBA bytes, row by row."""
        return self.data.tobytes()

    def to_image(self) -> Image.Image:
        """Convert to a standalone RGBA Pillow image."""
        return Image.fromarray(self.data.copy())
