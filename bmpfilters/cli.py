"""Command that runs every 24-bit filter over one image and saves each result."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from bmpfilters.bmp8 import BmpError
from bmpfilters.bmp24 import Bmp24Image

DEFAULT_INPUT = "../image/flowers_color.bmp"
DEFAULT_OUTPUT_DIR = "../Image"
DEFAULT_PREFIX = "flowers"
DEFAULT_BRIGHTNESS = 50

Operation = Callable[[Bmp24Image], None]


def _operations(brightness: int) -> List[Tuple[str, Operation]]:
    """Name suffixes and the transformations they stand for, in the order they run."""
    return [
        ("brightness", lambda image: image.brightness(brightness)),
        ("negative", Bmp24Image.negative),
        ("grayscale", Bmp24Image.grayscale),
        ("boxblur", Bmp24Image.box_blur),
        ("gaussian", Bmp24Image.gaussian_blur),
        ("outline", Bmp24Image.outline),
        ("emboss", Bmp24Image.emboss),
        ("sharpen", Bmp24Image.sharpen),
    ]


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bmpfilters",
        description="Apply brightness, negative, grayscale and convolution filters "
        "to a 24-bit BMP image, saving one file per filter.",
    )
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT, help="24-bit BMP to read")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="directory the filtered images are written to",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        default=DEFAULT_PREFIX,
        help="file name prefix of the filtered images",
    )
    parser.add_argument(
        "-b",
        "--brightness",
        type=int,
        default=DEFAULT_BRIGHTNESS,
        help="brightness change in percent",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run every filter on a freshly loaded copy of the input image."""
    args = _parse_args(argv)
    output_dir = Path(args.output_dir)

    try:
        image = Bmp24Image.load(args.input)
    except BmpError as exc:
        print(f"Error: cannot load the colour image: {exc}", file=sys.stderr)
        return 1

    print(
        f"Image loaded: {image.width}x{image.height}, depth {image.color_depth} bits"
    )

    try:
        for suffix, operation in _operations(args.brightness):
            operation(image)
            target = output_dir / f"{args.prefix}_{suffix}.bmp"
            image.save(target)
            print(f'Image saved to "{target}"')
            image = Bmp24Image.load(args.input)
    except BmpError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("\nAll filters have been applied and saved.")
    return 0


if __name__ == "__main__":
    sys.exit(main())