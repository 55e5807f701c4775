#!/usr/bin/env python3
"""Test the Pillow encoder by decoding its output."""

import sys
import os
import io

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from PIL import Image

from pixel_atlas import (AtlasCompositor, PixelBuffer, StaticImage,
                         UnsupportedFormat, encode)


def decode(data):
    return Image.open(io.BytesIO(data))


def test_png_round_trip_keeps_alpha():
    buffer = PixelBuffer(3, 2)
    buffer.fill([10, 20, 30, 40])
    buffer.set(2, 1, 3, 255)

    image = decode(encode(buffer, "png"))

    assert image.format == "PNG"
    assert image.size == (3, 2)
    rgba = image.convert("RGBA")
    assert rgba.getpixel((0, 0)) == (10, 20, 30, 40)
    assert rgba.getpixel((2, 1)) == (10, 20, 30, 255)


@pytest.mark.parametrize("format", ["jpg", "jpeg", "JPEG"])
def test_jpeg_drops_alpha(format):
    buffer = PixelBuffer(8, 8)
    buffer.fill([200, 200, 200, 0])

    data = encode(buffer, format, {"quality": 95})

    assert data[:2] == b"\xff\xd8"
    image = decode(data)
    assert image.format == "JPEG"
    assert image.mode == "RGB"
    r, g, b = image.getpixel((4, 4))
    assert abs(r - 200) <= 3 and abs(g - 200) <= 3 and abs(b - 200) <= 3


def test_gif():
    buffer = PixelBuffer(4, 4)
    buffer.fill([255, 0, 0, 255])

    data = encode(buffer, "gif")

    assert data[:4] == b"GIF8"
    image = decode(data)
    assert image.size == (4, 4)
    assert image.convert("RGB").getpixel((1, 1)) == (255, 0, 0)


def test_unknown_format():
    with pytest.raises(UnsupportedFormat):
        encode(PixelBuffer(2, 2), "tiff")


def test_compositor_export_default_encoder():
    """Export without an encoder produces a PNG of the atlas."""
    print("\n=== Test: Export to PNG ===")

    compositor = AtlasCompositor(6, 6)
    compositor.add_placement(StaticImage(np.full((2, 2, 4), 128, dtype=np.uint8)), 2, 2)

    image = decode(compositor.export()).convert("RGBA")

    assert image.size == (6, 6)
    assert image.getpixel((2, 2)) == (128, 128, 128, 128)
    assert image.getpixel((2, 1)) == (128, 128, 128, 128)
    assert image.getpixel((1, 1)) == (0, 0, 0, 0)

    print("✓ PNG export matches atlas buffer")
