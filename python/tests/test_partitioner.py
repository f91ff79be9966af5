"""Picture loading and slicing."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from backend.engine.partitioner import (
    crop_to_square,
    find_images,
    load_image,
    partition,
    sample_image,
)
from backend.models import InvalidImageError

RED = (255, 0, 0)
BLUE = (0, 0, 255)


# -- helpers ------------------------------------------------------------------


def _cell_colour(position: int) -> tuple[int, int, int]:
    return (position * 20, 255 - position * 20, 128)


def _grid_picture(side: int, size: int) -> Image.Image:
    """A picture whose cells are painted in a colour derived from their index."""
    image = Image.new("RGB", (side, side))
    draw = ImageDraw.Draw(image)
    cell = side // size
    for r in range(size):
        for c in range(size):
            draw.rectangle(
                (c * cell, r * cell, (c + 1) * cell - 1, (r + 1) * cell - 1),
                fill=_cell_colour(r * size + c),
            )
    return image


# -- partition ----------------------------------------------------------------


def test_partition_300px_into_3x3() -> None:
    pieces = partition(Image.new("RGB", (300, 300)), 3)

    assert [p for p, _ in pieces] == [0, 1, 2, 3, 4, 5, 6, 7]
    assert all(tile.size == (100, 100) for _, tile in pieces)


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_partition_tile_count_and_uniform_size(size: int) -> None:
    pieces = partition(Image.new("RGB", (240, 240)), size)

    assert len(pieces) == size * size - 1
    assert size * size - 1 not in {p for p, _ in pieces}
    assert len({tile.size for _, tile in pieces}) == 1
    assert pieces[0][1].width < 240


def test_partition_tiles_hold_their_own_cell() -> None:
    pieces = partition(_grid_picture(300, 3), 3)

    for position, tile in pieces:
        assert tile.getpixel((0, 0)) == _cell_colour(position)
        assert tile.getpixel((99, 99)) == _cell_colour(position)


def test_partition_drops_remainder_pixels() -> None:
    pieces = partition(Image.new("RGB", (302, 302)), 3)
    assert all(tile.size == (100, 100) for _, tile in pieces)


def test_partition_crops_to_centred_square() -> None:
    image = Image.new("RGB", (500, 300), BLUE)
    ImageDraw.Draw(image).rectangle((100, 0, 399, 299), fill=RED)

    pieces = partition(image, 3)

    assert all(tile.size == (100, 100) for _, tile in pieces)
    for _, tile in pieces:
        assert tile.getpixel((0, 0)) == RED
        assert tile.getpixel((99, 99)) == RED


def test_crop_to_square_portrait() -> None:
    square = crop_to_square(Image.new("RGB", (200, 320)))
    assert square.size == (200, 200)


@pytest.mark.parametrize("dims", [(0, 0), (0, 10), (10, 0)])
def test_partition_rejects_empty_image(dims: tuple[int, int]) -> None:
    with pytest.raises(InvalidImageError):
        partition(Image.new("RGB", dims), 3)


def test_partition_rejects_missing_image() -> None:
    with pytest.raises(InvalidImageError):
        partition(None, 3)  # type: ignore[arg-type]


def test_partition_rejects_image_smaller_than_grid() -> None:
    with pytest.raises(InvalidImageError):
        partition(Image.new("RGB", (2, 2)), 3)


def test_partition_rejects_bad_size() -> None:
    with pytest.raises(ValueError):
        partition(Image.new("RGB", (100, 100)), 1)


# -- loading ------------------------------------------------------------------


def test_load_image_from_file(tmp_path: Path) -> None:
    path = tmp_path / "picture.png"
    Image.new("RGBA", (40, 30), (1, 2, 3, 255)).save(path)

    image = load_image(path)

    assert image.mode == "RGB"
    assert image.size == (40, 30)
    assert image.getpixel((0, 0)) == (1, 2, 3)


def test_load_image_from_stream() -> None:
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), RED).save(buf, format="PNG")
    buf.seek(0)

    assert load_image(buf).getpixel((5, 5)) == RED


def test_load_image_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidImageError):
        load_image(tmp_path / "nope.png")


def test_load_image_undecodable(tmp_path: Path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a picture")

    with pytest.raises(InvalidImageError):
        load_image(path)


def test_find_images(tmp_path: Path) -> None:
    for name in ("b.png", "a.JPG", "notes.txt"):
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "sub.png").mkdir()

    assert [p.name for p in find_images(tmp_path)] == ["a.JPG", "b.png"]
    assert find_images(tmp_path / "missing") == []


def test_sample_image_is_playable() -> None:
    image = sample_image(120)

    assert image.size == (120, 120)
    assert image.mode == "RGB"
    assert len(partition(image, 4)) == 15
