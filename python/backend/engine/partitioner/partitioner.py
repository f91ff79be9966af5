"""Slices a picture into the tiles of an N×N puzzle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from PIL import Image, ImageDraw, UnidentifiedImageError

from backend.models.errors import InvalidImageError
from backend.models.grid import GridIndex, check_size, empty_index, to_index

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"})

# Ring colours for the built-in sample picture.
_SAMPLE_PALETTE: list[tuple[int, int, int]] = [
    (245, 194, 231),
    (203, 166, 247),
    (137, 180, 250),
    (148, 226, 213),
    (166, 227, 161),
    (249, 226, 175),
    (250, 179, 135),
    (243, 139, 168),
]


def load_image(source: str | Path | BinaryIO) -> Image.Image:
    """Open and fully decode *source*, returning an RGB image.

    Raises :class:`InvalidImageError` if the file is missing, cannot be
    decoded, or has no pixels.
    """
    try:
        with Image.open(source) as img:
            img.load()
            image = img.convert("RGB")
    except FileNotFoundError as exc:
        raise InvalidImageError(f"Image not found: {source}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImageError(f"Cannot decode image {source}: {exc}") from exc

    _check_dimensions(image)
    logger.debug("Loaded %s (%dx%d)", source, image.width, image.height)
    return image


def find_images(directory: Path) -> list[Path]:
    """Picture files directly inside *directory*, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
    )


def crop_to_square(image: Image.Image) -> Image.Image:
    """Return the largest square centred in *image*."""
    _check_dimensions(image)
    w, h = image.size
    if w == h:
        return image
    side = min(w, h)
    left = (w - side) // 2
    top = (h - side) // 2
    return image.crop((left, top, left + side, top + side))


def partition(image: Image.Image, size: int) -> list[tuple[GridIndex, Image.Image]]:
    """Cut *image* into ``size * size - 1`` equal tiles.

    The picture is first cropped to its centred square.  Each cell is
    ``side // size`` pixels wide; leftover pixels on the right and bottom
    edges are dropped.  Tiles are returned in row-major order as
    ``(correct_position, tile_image)`` pairs, without the bottom-right cell,
    which stays empty.
    """
    check_size(size)
    if image is None:
        raise InvalidImageError("No image to partition.")

    square = crop_to_square(image)
    cell = square.width // size
    if cell == 0:
        raise InvalidImageError(
            f"A {square.width}px image is too small for a {size}×{size} grid."
        )

    gap = empty_index(size)
    pieces: list[tuple[GridIndex, Image.Image]] = []
    for r in range(size):
        for c in range(size):
            position = to_index(r, c, size)
            if position == gap:
                continue
            x, y = c * cell, r * cell
            pieces.append((position, square.crop((x, y, x + cell, y + cell))))

    logger.debug(
        "Partitioned %dpx square into %d tiles of %dpx",
        square.width,
        len(pieces),
        cell,
    )
    return pieces


def sample_image(side: int = 300) -> Image.Image:
    """Draw a built-in picture so a game can start without an image file."""
    if side <= 0:
        raise InvalidImageError(f"Sample side must be positive, got {side}.")

    red = Image.linear_gradient("L").resize((side, side))
    green = red.rotate(90)
    blue = Image.new("L", (side, side), 150)
    image = Image.merge("RGB", (red, green, blue))

    draw = ImageDraw.Draw(image)
    rings = len(_SAMPLE_PALETTE)
    width = max(1, side // (4 * rings))
    for i, colour in enumerate(_SAMPLE_PALETTE):
        inset = i * side // (2 * rings + 2)
        # Off-centre rings so that no two tiles look alike.
        draw.ellipse(
            (inset // 2, inset, side - inset - 1, side - inset // 2 - 1),
            outline=colour,
            width=width,
        )
    draw.line((0, side - 1, side - 1, 0), fill=(30, 30, 46), width=width)
    return image


# -- helpers ------------------------------------------------------------------


def _check_dimensions(image: Image.Image) -> None:
    if image.width == 0 or image.height == 0:
        raise InvalidImageError(
            f"Image has no pixels ({image.width}x{image.height})."
        )
