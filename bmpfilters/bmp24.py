"""Loading, saving and filtering of 24-bit true-colour BMP images."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, List, Sequence

from bmpfilters.bmp8 import BmpError, Kernel, PathType, _f32

BITMAP_MAGIC = 0x00
BITMAP_SIZE = 0x02
BITMAP_OFFSET = 0x0A
BITMAP_WIDTH = 0x12
BITMAP_HEIGHT = 0x16
BITMAP_DEPTH = 0x1C
BITMAP_SIZE_RAW = 0x22
BMP_TYPE = 0x4D42
HEADER_SIZE = 0x0E
INFO_SIZE = 0x28
DEFAULT_DEPTH = 0x18

BOX_BLUR: Kernel = [[1.0 / 9.0] * 3 for _ in range(3)]
GAUSSIAN_BLUR: Kernel = [
    [1 / 16.0, 2 / 16.0, 1 / 16.0],
    [2 / 16.0, 4 / 16.0, 2 / 16.0],
    [1 / 16.0, 2 / 16.0, 1 / 16.0],
]
OUTLINE: Kernel = [[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]]
EMBOSS: Kernel = [[-2, -1, 0], [-1, 1, 1], [0, 1, 2]]
SHARPEN: Kernel = [[0, -1, 0], [-1, 5, -1], [0, -1, 0]]


@dataclass(frozen=True)
class Pixel:
    """An RGB colour with 8-bit channels."""

    red: int = 0
    green: int = 0
    blue: int = 0


@dataclass
class BmpHeader:
    """The 14-byte BMP file header."""

    FORMAT: ClassVar[str] = "<HIHHI"

    type: int = BMP_TYPE
    size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    offset: int = HEADER_SIZE + INFO_SIZE

    @classmethod
    def unpack(cls, data: bytes) -> "BmpHeader":
        """Decode a header from the first 14 bytes of data."""
        if len(data) < HEADER_SIZE:
            raise BmpError(f"file header needs {HEADER_SIZE} bytes, got {len(data)}")
        return cls(*struct.unpack_from(cls.FORMAT, data))

    def pack(self) -> bytes:
        """Encode the header as 14 little-endian bytes."""
        return struct.pack(
            self.FORMAT, self.type, self.size, self.reserved1, self.reserved2, self.offset
        )


@dataclass
class BmpInfo:
    """The 40-byte BITMAPINFOHEADER."""

    FORMAT: ClassVar[str] = "<IiiHHIIiiII"

    size: int = INFO_SIZE
    width: int = 0
    height: int = 0
    planes: int = 1
    bits: int = DEFAULT_DEPTH
    compression: int = 0
    imagesize: int = 0
    xresolution: int = 0
    yresolution: int = 0
    ncolors: int = 0
    importantcolors: int = 0

    @classmethod
    def unpack(cls, data: bytes) -> "BmpInfo":
        """Decode an info header from the first 40 bytes of data."""
        if len(data) < INFO_SIZE:
            raise BmpError(f"info header needs {INFO_SIZE} bytes, got {len(data)}")
        return cls(*struct.unpack_from(cls.FORMAT, data))

    def pack(self) -> bytes:
        """Encode the info header as 40 little-endian bytes."""
        return struct.pack(
            self.FORMAT,
            self.size,
            self.width,
            self.height,
            self.planes,
            self.bits,
            self.compression,
            self.imagesize,
            self.xresolution,
            self.yresolution,
            self.ncolors,
            self.importantcolors,
        )


def _row_size(width: int) -> int:
    return (width * 3 + 3) & ~3


def _clamp_byte(value: float) -> int:
    return int(min(255.0, max(0.0, value)))


def _checked_kernel(kernel: Kernel) -> List[List[float]]:
    rows = [list(row) for row in kernel]
    size = len(rows)
    if size == 0 or size % 2 == 0 or any(len(row) != size for row in rows):
        raise BmpError("kernel must be a non-empty square of odd size")
    return [[_f32(c) for c in row] for row in rows]


@dataclass
class Bmp24Image:
    """A 24-bit bitmap: headers plus rows of pixels, top row first."""

    header: BmpHeader
    header_info: BmpInfo
    width: int
    height: int
    color_depth: int
    data: List[List[Pixel]] = field(default_factory=list)

    @classmethod
    def allocate(cls, width: int, height: int, color_depth: int) -> "Bmp24Image":
        """Create a black image with headers describing its size."""
        if width < 0 or height < 0:
            raise BmpError(f"invalid image size {width}x{height}")
        image_size = _row_size(width) * height
        header = BmpHeader(size=HEADER_SIZE + INFO_SIZE + image_size)
        info = BmpInfo(width=width, height=height, bits=color_depth, imagesize=image_size)
        pixels = [[Pixel() for _ in range(width)] for _ in range(height)]
        return cls(header, info, width, height, color_depth, pixels)

    @classmethod
    def load(cls, filename: PathType) -> "Bmp24Image":
        """Read a 24-bit BMP file."""
        try:
            with open(filename, "rb") as file:
                raw = file.read()
        except OSError as exc:
            raise BmpError(f"cannot open {filename!s}: {exc}") from exc

        if len(raw) < HEADER_SIZE + INFO_SIZE:
            raise BmpError(f"{filename!s} is too short to be a BMP file")
        (width,) = struct.unpack_from("<i", raw, BITMAP_WIDTH)
        (height,) = struct.unpack_from("<i", raw, BITMAP_HEIGHT)
        (color_depth,) = struct.unpack_from("<H", raw, BITMAP_DEPTH)

        image = cls.allocate(width, height, color_depth)
        image.header = BmpHeader.unpack(raw[BITMAP_MAGIC:])
        image.header_info = BmpInfo.unpack(raw[HEADER_SIZE:])
        image._read_pixels(raw, filename)
        return image

    def _read_pixels(self, raw: bytes, filename: PathType) -> None:
        row_size = _row_size(self.width)
        start = self.header.offset
        if self.height and start + (self.height - 1) * row_size + self.width * 3 > len(raw):
            raise BmpError(f"{filename!s} holds too little pixel data")
        for r, y in enumerate(reversed(range(self.height))):
            base = start + r * row_size
            row = raw[base : base + self.width * 3]
            self.data[y] = [
                Pixel(red=row[i + 2], green=row[i + 1], blue=row[i])
                for i in range(0, len(row), 3)
            ]

    def _pixel_bytes(self) -> bytes:
        padding = bytes(_row_size(self.width) - self.width * 3)
        out = bytearray()
        for row in reversed(self.data):
            for p in row:
                out += bytes((p.blue, p.green, p.red))
            out += padding
        return bytes(out)

    def save(self, filename: PathType) -> None:
        """Write headers and pixel data; pixels go at the header's offset."""
        out = bytearray(self.header.pack() + self.header_info.pack())
        offset = self.header.offset
        if len(out) < offset:
            out += bytes(offset - len(out))
        pixels = self._pixel_bytes()
        out[offset : offset + len(pixels)] = pixels
        try:
            with open(filename, "wb") as file:
                file.write(out)
        except OSError as exc:
            raise BmpError(f"cannot write {filename!s}: {exc}") from exc

    def _map(self, func) -> None:
        self.data = [[func(p) for p in row] for row in self.data]

    def negative(self) -> None:
        """Invert every channel of every pixel."""
        self._map(lambda p: Pixel(255 - p.red, 255 - p.green, 255 - p.blue))

    def grayscale(self) -> None:
        """Replace each pixel by the mean of its channels."""

        def gray(p: Pixel) -> Pixel:
            g = (p.red + p.green + p.blue) // 3
            return Pixel(g, g, g)

        self._map(gray)

    def brightness(self, value: int) -> None:
        """Scale every channel by 1 + value/100, capping at 255."""
        factor = _f32(1.0 + _f32(value / 100.0))

        def scale(channel: int) -> int:
            scaled = int(_f32(channel * factor))
            return min(scaled, 255) & 0xFF

        self._map(lambda p: Pixel(scale(p.red), scale(p.green), scale(p.blue)))

    def convolution(self, x: int, y: int, kernel: Kernel) -> Pixel:
        """Convolve the neighbourhood of (x, y), skipping pixels outside the image."""
        coeffs = _checked_kernel(kernel)
        return self._convolve(x, y, coeffs)

    def _convolve(self, x: int, y: int, coeffs: Sequence[Sequence[float]]) -> Pixel:
        n = len(coeffs) // 2
        sum_r = sum_g = sum_b = 0.0
        for dy, row in enumerate(coeffs, start=-n):
            py = y + dy
            if not 0 <= py < self.height:
                continue
            for dx, coeff in enumerate(row, start=-n):
                px = x + dx
                if not 0 <= px < self.width:
                    continue
                p = self.data[py][px]
                sum_r = _f32(sum_r + _f32(p.red * coeff))
                sum_g = _f32(sum_g + _f32(p.green * coeff))
                sum_b = _f32(sum_b + _f32(p.blue * coeff))
        return Pixel(_clamp_byte(sum_r), _clamp_byte(sum_g), _clamp_byte(sum_b))

    def apply_filter(self, kernel: Kernel) -> None:
        """Convolve all pixels far enough from the border; border pixels are kept."""
        coeffs = _checked_kernel(kernel)
        n = len(coeffs) // 2
        self.data = [
            [
                self._convolve(x, y, coeffs)
                if n <= x < self.width - n and n <= y < self.height - n
                else p
                for x, p in enumerate(row)
            ]
            for y, row in enumerate(self.data)
        ]

    def box_blur(self) -> None:
        """Apply a 3x3 mean filter."""
        self.apply_filter(BOX_BLUR)

    def gaussian_blur(self) -> None:
        """Apply a 3x3 Gaussian blur."""
        self.apply_filter(GAUSSIAN_BLUR)

    def outline(self) -> None:
        """Apply a 3x3 edge-detection filter."""
        self.apply_filter(OUTLINE)

    def emboss(self) -> None:
        """Apply a 3x3 emboss filter."""
        self.apply_filter(EMBOSS)

    def sharpen(self) -> None:
        """Apply a 3x3 sharpening filter."""
        self.apply_filter(SHARPEN)