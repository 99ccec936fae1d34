import struct

import pytest

from bmpfilters.bmp8 import COLOR_TABLE_SIZE, HEADER_SIZE, Bmp8Image, BmpError


def make_header(width, height, data_size, compression=0, depth=8):
    header = bytearray(HEADER_SIZE)
    header[0:2] = b"BM"
    struct.pack_into("<I", header, 2, HEADER_SIZE + COLOR_TABLE_SIZE + data_size)
    struct.pack_into("<I", header, 10, HEADER_SIZE + COLOR_TABLE_SIZE)
    struct.pack_into("<I", header, 14, 40)
    struct.pack_into("<II", header, 18, width, height)
    struct.pack_into("<H", header, 26, 1)
    struct.pack_into("<H", header, 28, depth)
    struct.pack_into("<I", header, 30, compression)
    struct.pack_into("<I", header, 34, data_size)
    return bytes(header)


def color_table():
    return b"".join(bytes((i, i, i, 0)) for i in range(256))


def write_bmp(path, width, height, pixels, data_size=None, compression=0):
    size = len(pixels) if data_size is None else data_size
    path.write_bytes(make_header(width, height, size, compression) + color_table() + bytes(pixels))
    return path


def make_image(width, height, pixels):
    return Bmp8Image(
        header=make_header(width, height, len(pixels)),
        color_table=color_table(),
        data=bytearray(pixels),
        width=width,
        height=height,
        color_depth=8,
    )


def test_load_reads_fields(tmp_path):
    pixels = list(range(12))
    path = write_bmp(tmp_path / "a.bmp", 4, 3, pixels)
    img = Bmp8Image.load(path)
    assert (img.width, img.height, img.color_depth) == (4, 3, 8)
    assert img.data_size == 12
    assert list(img.data) == pixels
    assert img.color_table == color_table()


def test_zero_data_size_uncompressed_uses_dimensions(tmp_path):
    pixels = list(range(6))
    path = write_bmp(tmp_path / "z.bmp", 3, 2, pixels, data_size=0)
    img = Bmp8Image.load(path)
    assert img.data_size == 6
    assert list(img.data) == pixels


def test_zero_data_size_compressed_raises(tmp_path):
    path = write_bmp(tmp_path / "c.bmp", 3, 2, [0] * 6, data_size=0, compression=1)
    with pytest.raises(BmpError):
        Bmp8Image.load(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(BmpError):
        Bmp8Image.load(tmp_path / "missing.bmp")


def test_truncated_header_raises(tmp_path):
    path = tmp_path / "t.bmp"
    path.write_bytes(b"BM" + bytes(10))
    with pytest.raises(BmpError):
        Bmp8Image.load(path)


def test_truncated_data_raises(tmp_path):
    path = tmp_path / "d.bmp"
    path.write_bytes(make_header(4, 4, 16) + color_table() + bytes(5))
    with pytest.raises(BmpError):
        Bmp8Image.load(path)


def test_save_load_round_trip(tmp_path):
    pixels = [(i * 37) % 256 for i in range(20)]
    src = write_bmp(tmp_path / "src.bmp", 5, 4, pixels)
    img = Bmp8Image.load(src)
    out = tmp_path / "out.bmp"
    img.save(out)
    assert out.read_bytes() == src.read_bytes()
    again = Bmp8Image.load(out)
    assert again == img


def test_save_file_size(tmp_path):
    img = make_image(2, 2, [1, 2, 3, 4])
    out = tmp_path / "s.bmp"
    img.save(out)
    assert len(out.read_bytes()) == HEADER_SIZE + COLOR_TABLE_SIZE + 4


def test_bad_header_length_rejected():
    with pytest.raises(BmpError):
        Bmp8Image(header=bytes(10), color_table=color_table(), data=bytearray())


def test_info_lists_fields():
    img = make_image(3, 2, [0] * 6)
    lines = img.info().splitlines()
    assert lines == ["Image Info:", "Width: 3", "Height: 2", "Color Depth: 8", "Data Size: 6"]


def test_negative_complements_and_is_involution():
    pixels = [0, 1, 127, 128, 200, 255]
    img = make_image(3, 2, pixels)
    img.negative()
    assert [a + b for a, b in zip(pixels, img.data)] == [255] * len(pixels)
    img.negative()
    assert list(img.data) == pixels


def test_brightness_clamps():
    img = make_image(2, 2, [0, 100, 200, 255])
    img.brightness(1000)
    assert list(img.data) == [255] * 4
    img.brightness(-1000)
    assert list(img.data) == [0] * 4


def test_brightness_adds_within_range():
    pixels = [10, 20, 30, 40]
    img = make_image(2, 2, pixels)
    img.brightness(5)
    assert [b - a for a, b in zip(pixels, img.data)] == [5] * 4


def test_threshold_binarises():
    pixels = [0, 49, 50, 51, 200, 255]
    img = make_image(3, 2, pixels)
    img.threshold(50)
    assert list(img.data) == [255 if p >= 50 else 0 for p in pixels]
    assert set(img.data) <= {0, 255}


def test_identity_filter_keeps_image():
    pixels = [(i * 13) % 256 for i in range(25)]
    img = make_image(5, 5, pixels)
    img.apply_filter([[0, 0, 0], [0, 1, 0], [0, 0, 0]])
    assert list(img.data) == pixels


def test_outline_on_uniform_image_clears_interior_keeps_border():
    img = make_image(4, 4, [90] * 16)
    img.apply_filter([[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]])
    interior = {(1, 1), (2, 1), (1, 2), (2, 2)}
    for y in range(4):
        for x in range(4):
            expected = 0 if (x, y) in interior else 90
            assert img.data[y * 4 + x] == expected


def test_filter_reads_from_original_not_updated_pixels():
    pixels = [0] * 16
    pixels[5] = 200
    img = make_image(4, 4, pixels)
    img.apply_filter([[0, 0, 0], [1, 0, 0], [0, 0, 0]])
    # each interior pixel takes its left neighbour from the unmodified image
    assert img.data[5] == 0
    assert img.data[6] == 200


def test_filter_rejects_non_square_kernel():
    img = make_image(3, 3, [0] * 9)
    with pytest.raises(BmpError):
        img.apply_filter([[1, 0], [0, 1, 0]])


def test_filter_rejects_even_kernel():
    img = make_image(3, 3, [0] * 9)
    with pytest.raises(BmpError):
        img.apply_filter([[1, 0], [0, 1]])