"""Source images consumed by the compositor: static and animated."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, ImageSequence

from .errors import InvalidDimensions
from .pixel_buffer import CHANNELS


def _to_rgba(pixels) -> np.ndarray:
    """
    Normalise a (height, width[, channels]) array to uint8 RGBA.

    Grayscale and RGB inputs get an opaque alpha channel. Values are
    clamped to 0-255 before the uint8 conversion.
    """
    array = np.asarray(pixels)
    if array.ndim == 2:
        array = np.repeat(array[:, :, np.newaxis], 3, axis=2)
    if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
        raise InvalidDimensions(f"Expected (height, width, 3|4) pixels, got shape {array.shape}")

    if array.dtype != np.uint8:
        array = np.clip(array, 0, 255).astype(np.uint8)

    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)
    return array


class SourceImage(ABC):
    """Decoded image that can be placed on an atlas."""

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, ...]:
        """(width, height, 4) or (frames, width, height, 4)."""
        pass

    @abstractmethod
    def first_frame(self) -> np.ndarray:
        """Pixels the compositor copies, as a (height, width, 4) uint8 array."""
        pass


class StaticImage(SourceImage):
    """Single-frame image."""

    def __init__(self, pixels):
        self._pixels = _to_rgba(pixels)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.width, self.height, CHANNELS)

    def get(self, col: int, row: int, channel: int) -> int:
        return int(self._pixels[row, col, channel])

    def first_frame(self) -> np.ndarray:
        return self._pixels


class AnimatedImage(SourceImage):
    """
    Multi-frame image such as a decoded GIF.

    Only frame 0 ever reaches the atlas; the remaining frames are kept so
    the object still describes the whole animation.
    """

    def __init__(self, frames):
        if len(frames) == 0:
            raise InvalidDimensions("Animated image needs at least one frame")
        if any(np.ndim(frame) != 3 for frame in frames):
            raise InvalidDimensions("Animated frames must be (frames, height, width, 3|4) pixels")
        normalised = [_to_rgba(frame) for frame in frames]
        if any(frame.shape != normalised[0].shape for frame in normalised):
            raise InvalidDimensions("All frames of an animated image must share one size")
        self._frames = np.stack(normalised)

    @property
    def frame_count(self) -> int:
        return self._frames.shape[0]

    @property
    def width(self) -> int:
        return self._frames.shape[2]

    @property
    def height(self) -> int:
        return self._frames.shape[1]

    @property
    def shape(self) -> Tuple[int, int, int, int]:
        return (self.frame_count, self.width, self.height, CHANNELS)

    def get(self, frame: int, col: int, row: int, channel: int) -> int:
        return int(self._frames[frame, row, col, channel])

    def first_frame(self) -> np.ndarray:
        return self._frames[0]


def from_pil(image: Image.Image) -> SourceImage:
    """Convert a Pillow image, animated or not, into a source image."""
    if getattr(image, "n_frames", 1) > 1:
        frames = [np.array(frame.convert("RGBA"), dtype=np.uint8)
                  for frame in ImageSequence.Iterator(image)]
        return AnimatedImage(frames)
    return StaticImage(np.array(image.convert("RGBA"), dtype=np.uint8))


def load_image(path: str | Path) -> SourceImage:
    """Decode an image file (PNG, JPG, GIF, etc.) with Pillow."""
    with Image.open(Path(path)) as img:
        return from_pil(img)
