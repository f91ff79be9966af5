#!/usr/bin/env python3
"""Picture Slide Puzzle.

Usage::

    python main.py                         # interactive menu
    python main.py -f rich -d medium       # Rich terminal, 4×4
    python main.py -f pygame -i photo.jpg  # Pygame GUI, straight into a game
    python main.py -f rich -s 6 --seed 7   # custom size, repeatable scramble
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
IMAGES_DIR = PROJECT_ROOT / "images"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models import Difficulty, InvalidImageError  # noqa: E402

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    # stderr only: the Rich frontend owns stdout.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _launch(frontend: Frontend, **options) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(**options)


def _menu_loop(**options) -> None:
    while True:
        print()
        print("  ====================================")
        print("       P I C T U R E   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        if choice == "1":
            _launch(Frontend.rich, **options)
        elif choice == "2":
            _launch(Frontend.pygame, **options)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    difficulty: Difficulty = typer.Option(
        Difficulty.EASY, "-d", "--difficulty",
        help="easy = 3×3, medium = 4×4, hard = 5×5.",
    ),
    size: Optional[int] = typer.Option(
        None, "-s", "--size",
        min=2,
        help="Custom grid size; overrides --difficulty.",
    ),
    image: Optional[Path] = typer.Option(
        None, "-i", "--image",
        exists=True, dir_okay=False,
        help="Picture to play with; skips the menus.",
    ),
    images_dir: Path = typer.Option(
        IMAGES_DIR, "--images-dir",
        file_okay=False,
        help="Folder listed by the picture picker.",
    ),
    allow_unsolvable: bool = typer.Option(
        False, "--allow-unsolvable",
        help="Keep the raw shuffle even when it cannot be solved.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for the scramble.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine activity at DEBUG level.",
    ),
) -> None:
    """Picture Slide Puzzle."""
    _configure_logging(verbose)
    options = dict(
        size=size if size is not None else difficulty.size,
        images_dir=images_dir,
        image=image,
        ensure_solvable=not allow_unsolvable,
        seed=seed,
    )
    logger.debug("Options: %s", options)

    try:
        if frontend is None:
            _menu_loop(**options)
        else:
            _launch(frontend, **options)
    except InvalidImageError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
