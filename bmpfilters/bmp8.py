"""Loading, saving and filtering of 8-bit paletted BMP images."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import Sequence, Union

HEADER_SIZE = 54
COLOR_TABLE_SIZE = 1024

_WIDTH_OFFSET = 18
_HEIGHT_OFFSET = 22
_DEPTH_OFFSET = 28
_COMPRESSION_OFFSET = 30
_DATA_SIZE_OFFSET = 34

PathType = Union[str, "PathLike[str]"]
Kernel = Sequence[Sequence[float]]


class BmpError(Exception):
    """Raised when a BMP image cannot be read, written or processed."""


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class Bmp8Image:
    """An 8-bit grayscale/paletted bitmap: raw header, colour table and pixel bytes."""

    header: bytes
    color_table: bytes
    data: bytearray
    width: int = 0
    height: int = 0
    color_depth: int = 0
    _unused: None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.header) != HEADER_SIZE:
            raise BmpError(f"header must be {HEADER_SIZE} bytes, got {len(self.header)}")
        if len(self.color_table) != COLOR_TABLE_SIZE:
            raise BmpError(
                f"colour table must be {COLOR_TABLE_SIZE} bytes, got {len(self.color_table)}"
            )
        self.header = bytes(self.header)
        self.color_table = bytes(self.color_table)
        self.data = bytearray(self.data)

    @property
    def data_size(self) -> int:
        """Number of pixel bytes held by the image."""
        return len(self.data)

    @classmethod
    def load(cls, filename: PathType) -> "Bmp8Image":
        """Read an 8-bit BMP file."""
        try:
            with open(filename, "rb") as file:
                header = file.read(HEADER_SIZE)
                if len(header) != HEADER_SIZE:
                    raise BmpError(
                        f"error reading header from {filename!s}: "
                        f"expected {HEADER_SIZE} bytes, got {len(header)}"
                    )
                width, height = struct.unpack_from("<II", header, _WIDTH_OFFSET)
                (color_depth,) = struct.unpack_from("<H", header, _DEPTH_OFFSET)
                (data_size,) = struct.unpack_from("<I", header, _DATA_SIZE_OFFSET)
                if data_size == 0:
                    (compression,) = struct.unpack_from("<I", header, _COMPRESSION_OFFSET)
                    if compression != 0:
                        raise BmpError(f"{filename!s} is compressed and has no data size")
                    data_size = width * height

                color_table = file.read(COLOR_TABLE_SIZE)
                if len(color_table) != COLOR_TABLE_SIZE:
                    raise BmpError(
                        f"error reading colour table from {filename!s}: "
                        f"expected {COLOR_TABLE_SIZE} bytes, got {len(color_table)}"
                    )
                data = file.read(data_size)
                if len(data) != data_size:
                    raise BmpError(
                        f"error reading data from {filename!s}: "
                        f"expected {data_size} bytes, got {len(data)}"
                    )
        except OSError as exc:
            raise BmpError(f"cannot open {filename!s}: {exc}") from exc

        return cls(
            header=header,
            color_table=color_table,
            data=bytearray(data),
            width=width,
            height=height,
            color_depth=color_depth,
        )

    def save(self, filename: PathType) -> None:
        """Write header, colour table and pixel data to a file."""
        try:
            with open(filename, "wb") as file:
                file.write(self.header)
                file.write(self.color_table)
                file.write(self.data)
        except OSError as exc:
            raise BmpError(f"cannot write {filename!s}: {exc}") from exc

    def info(self) -> str:
        """Describe the image dimensions, depth and data size."""
        return (
            "Image Info:\n"
            f"Width: {self.width}\n"
            f"Height: {self.height}\n"
            f"Color Depth: {self.color_depth}\n"
            f"Data Size: {self.data_size}"
        )

    def negative(self) -> None:
        """Invert every pixel value."""
        table = bytes(255 - v for v in range(256))
        self.data = bytearray(self.data.translate(table))

    def brightness(self, value: int) -> None:
        """Add a value to every pixel, clamping to 0..255."""
        table = bytes(min(255, max(0, v + value)) for v in range(256))
        self.data = bytearray(self.data.translate(table))

    def threshold(self, threshold: int) -> None:
        """Set pixels at or above the threshold to 255, the rest to 0."""
        table = bytes(255 if v >= threshold else 0 for v in range(256))
        self.data = bytearray(self.data.translate(table))

    def apply_filter(self, kernel: Kernel) -> None:
        """Convolve interior pixels with a square, odd-sized kernel; borders are kept."""
        rows = [list(row) for row in kernel]
        size = len(rows)
        if size == 0 or size % 2 == 0 or any(len(row) != size for row in rows):
            raise BmpError("kernel must be a non-empty square of odd size")
        coeffs = [[_f32(c) for c in row] for row in rows]
        n = size // 2
        border = max(1, n)
        width, height = self.width, self.height
        if width * height > len(self.data):
            raise BmpError("image data is smaller than width * height")

        original = bytes(self.data)
        for y in range(border, height - border):
            for x in range(border, width - border):
                total = 0.0
                for dy, row in enumerate(coeffs, start=-n):
                    base = (y + dy) * width + x
                    for dx, coeff in enumerate(row, start=-n):
                        total = _f32(total + _f32(original[base + dx] * coeff))
                total = min(255.0, max(0.0, total))
                self.data[y * width + x] = int(total)