# bmpfilters

A small, dependency-free toolkit for uncompressed BMP images. It reads and
writes two kinds of bitmap:

- **8-bit** images with a 54-byte header and a 1024-byte colour table
  (`bmpfilters.bmp8.Bmp8Image`)
- **24-bit colour** images (`bmpfilters.bmp24.Bmp24Image`)

and applies point operations and square convolution filters to them.
Every failure to read, write or process an image raises
`bmpfilters.bmp8.BmpError`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## 8-bit images

```python
from bmpfilters.bmp8 import Bmp8Image, BmpError

img = Bmp8Image.load("lena_gray.bmp")
print(img.info())       # width, height, colour depth and data size

img.negative()          # every pixel becomes 255 - value
img.brightness(40)      # add 40, clamped to 0..255
img.threshold(128)      # pixels >= 128 become 255, others 0

img.apply_filter([
    [0, -1, 0],
    [-1, 5, -1],
    [0, -1, 0],
])
img.save("lena_processed.bmp")
```

The loader reads the 54-byte header, then the 1024-byte colour table, then
the pixel bytes. The number of pixel bytes comes from the header's image-size
field, or is `width * height` when that field is zero and the image is
uncompressed. A missing file, a short read, or a compressed file without an
image size raises `BmpError`. `save` writes the header, colour table and
pixel bytes back unchanged apart from the edits.

`apply_filter` takes a non-empty, square kernel of odd size (anything else
raises `BmpError`). Pixels within the kernel's reach of the border, and at
least the outermost ring, are left unchanged; results are clamped to 0..255.

## 24-bit colour images

```python
from bmpfilters.bmp24 import Bmp24Image

img = Bmp24Image.load("flowers_color.bmp")
img.grayscale()         # mean of red, green and blue, rounded down
img.save("flowers_grayscale.bmp")

img = Bmp24Image.load("flowers_color.bmp")
img.brightness(50)      # scale each channel by 1.5, capped at 255
img.save("flowers_brightness.bmp")
```

Pixels are held in `img.data` as rows of frozen `Pixel(red, green, blue)`
values, top row first. `negative()` inverts every channel.

Ready-made 3×3 filters work in place:

| Method            | Effect                  |
|-------------------|-------------------------|
| `box_blur()`      | uniform average         |
| `gaussian_blur()` | 1-2-1 weighted blur     |
| `outline()`       | edge detection          |
| `emboss()`        | relief effect           |
| `sharpen()`       | sharpening              |

Any non-empty, square, odd-sized kernel can be applied with
`apply_filter(kernel)`; pixels within the kernel's reach of the border are
left unchanged. `convolution(x, y, kernel)` returns the filtered value of a
single pixel, ignoring neighbours that fall outside the image.

The header structures are exposed as `BmpHeader` (14 bytes) and `BmpInfo`
(40 bytes), each with `unpack(data)` and `pack()`. A black image with
matching headers can be created with
`Bmp24Image.allocate(width, height, color_depth)`. On saving, the headers are
written as they are and the pixel rows, bottom row first and padded to a
multiple of four bytes, start at the header's `offset`.

## Command line

The `bmpfilters` command loads a 24-bit colour image and, starting each time
from a freshly loaded copy, writes one file per effect: brightness, negative,
grayscale, box blur, Gaussian blur, outline, emboss and sharpen.

```
bmpfilters photo.bmp --output-dir out --prefix photo --brightness 30
```

This writes `out/photo_brightness.bmp`, `out/photo_negative.bmp`, … ,
`out/photo_sharpen.bmp`. The defaults are input `../image/flowers_color.bmp`,
output directory `../Image`, prefix `flowers` and brightness `50`. The output
directory must already exist. The command returns 1 and prints the error if
the image cannot be loaded or a result cannot be saved.

```
bmpfilters --help
```

## What it does not do

- No compressed BMPs, and no bit depths other than 8 and 24: the 24-bit
  loader reads three bytes per pixel whatever the header says.
- No top-down (negative-height) 24-bit images; loading one raises `BmpError`.
- No conversion between the 8-bit and 24-bit forms, and no command for 8-bit
  images: those are handled through `Bmp8Image` in Python only.