"""Pack a handful of images into one atlas, left to right."""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pixel_atlas import EXTRUDE_SIZE, AtlasCompositor, load_image


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("images", nargs="+", type=Path, help="Source images (PNG, JPG, GIF)")
    parser.add_argument("-o", "--output", type=Path, default=Path("atlas.png"))
    parser.add_argument("--format", default=None, help="png, jpg, jpeg or gif (default: from output suffix)")
    parser.add_argument("--background", type=int, nargs=4, metavar=("R", "G", "B", "A"))
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s.%(msecs)03d - %(name)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    images = [load_image(path) for path in args.images]

    # Leave room for both neighbours' extrusion between images
    padding = 2 * EXTRUDE_SIZE
    width = sum(image.width for image in images) + padding * (len(images) + 1)
    height = max(image.height for image in images) + padding * 2

    compositor = AtlasCompositor(width, height)
    x = padding
    for path, image in zip(args.images, images):
        compositor.add_placement(image, x, padding)
        print(f"{path.name}: {image.width}x{image.height} at ({x}, {padding})")
        x += image.width + padding

    format = args.format or args.output.suffix.lstrip(".") or None
    args.output.write_bytes(compositor.export(format=format, background=args.background))
    print(f"Wrote {args.output} ({width}x{height})")


if __name__ == "__main__":
    main()
