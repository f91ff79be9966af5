"""Rich terminal frontend — picture tiles drawn with coloured half blocks.

Each character cell shows two pixels: the upper half block takes the top
pixel as its foreground colour and the bottom pixel as its background.
Screens follow the shared :class:`Navigator`.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image
from rich.align import Align
from rich.color import Color
from rich.console import Console, Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.engine.navigation import Event, Navigator, Screen
from backend.engine.partitioner import (
    crop_to_square,
    find_images,
    load_image,
    partition,
    sample_image,
)
from backend.models import Difficulty, Direction, InvalidImageError, PuzzleState
from frontend.cli.input_handler import get_key

logger = logging.getLogger(__name__)

console = Console()

BOARD_CHARS = 48  # board width in terminal columns
REF_CHARS = 16  # reference thumbnail width
_HALF_BLOCK = "▀"
_EMPTY_STYLE = Style(bgcolor="grey11")
_SAMPLE_LABEL = "Built-in picture"

_DIRECTIONS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


@dataclass
class _Session:
    sizes: list[int]
    sel_size: int
    images_dir: Path
    ensure_solvable: bool
    rng: random.Random
    sel_image: int = 0
    picture: Image.Image | None = None
    game: GamePlay | None = None
    pixels: dict[int, list[list[tuple[int, int, int]]]] = field(default_factory=dict)
    status: str = ""


# -- helpers ------------------------------------------------------------------


def _size_label(size: int) -> str:
    difficulty = Difficulty.from_size(size)
    name = difficulty.value.capitalize() if difficulty else "Custom"
    return f"{name} {size}×{size}"


def _image_choices(session: _Session) -> list[str]:
    return [_SAMPLE_LABEL, *(p.name for p in find_images(session.images_dir))]


def _pixel_rows(image: Image.Image, side: int) -> list[list[tuple[int, int, int]]]:
    """Downscale *image* to ``side``×``side`` and return its RGB rows."""
    small = image.convert("RGB").resize((side, side), Image.Resampling.LANCZOS)
    px = small.load()
    return [[px[x, y] for x in range(side)] for y in range(side)]


def _half_block_lines(rows: list[list[tuple[int, int, int]]]) -> list[Text]:
    lines: list[Text] = []
    for y in range(0, len(rows) - 1, 2):
        line = Text()
        for top, bottom in zip(rows[y], rows[y + 1]):
            line.append(
                _HALF_BLOCK,
                style=Style(
                    color=Color.from_rgb(*top), bgcolor=Color.from_rgb(*bottom)
                ),
            )
        lines.append(line)
    return lines


def _tile_side(size: int) -> int:
    side = max(4, BOARD_CHARS // size - 1)
    return side - side % 2


# -- board rendering ----------------------------------------------------------


def _prepare_pixels(session: _Session) -> None:
    """Scale every tile picture once per game."""
    game = session.game
    assert game is not None
    side = _tile_side(game.size)
    session.pixels = {
        tile.correct_position: _pixel_rows(tile.image, side)
        for tile in game.puzzle.tiles
        if tile.image is not None
    }


def _render_board(puzzle: PuzzleState, pixels: dict[int, list]) -> Text:
    """Return the board as lines of half-block pixels."""
    size = puzzle.size
    side = _tile_side(size)
    by_cell = {tile.current_position: tile for tile in puzzle.tiles}

    lines: list[Text] = []
    for r in range(size):
        cells: list[list[Text]] = []
        for c in range(size):
            tile = by_cell.get(r * size + c)
            if tile is None:
                cells.append([Text(" " * side, style=_EMPTY_STYLE)] * (side // 2))
            elif tile.correct_position in pixels:
                cells.append(_half_block_lines(pixels[tile.correct_position]))
            else:
                label = str(tile.label).center(side)
                blank = Text(" " * side, style="on grey35")
                mid = Text(label, style="bold white on grey35")
                cells.append(
                    [mid if i == side // 4 else blank for i in range(side // 2)]
                )
        for i in range(side // 2):
            line = Text()
            for c, parts in enumerate(cells):
                if c:
                    line.append(" ")
                line.append_text(parts[i])
            lines.append(line)
        if r < size - 1:
            lines.append(Text(""))
    return Text("\n").join(lines)


def _render_picture(picture: Image.Image, chars: int) -> Text:
    side = chars - chars % 2
    return Text("\n").join(_half_block_lines(_pixel_rows(picture, side)))


def _print_panel(body, title: str, style: str = "bright_blue") -> None:
    console.clear()
    console.print()
    console.print(
        Align.center(
            Panel(body, title=title, border_style=style, padding=(1, 2))
        )
    )


def _print_status(session: _Session) -> None:
    if session.status:
        console.print(Align.center(Text.from_markup(f"  {session.status}")))
        session.status = ""


def _controls(*pairs: tuple[str, str]) -> Text:
    text = Text()
    for key, label in pairs:
        text.append(f"  {key}", style="bold cyan")
        text.append(f"  {label} ", style="dim")
    return text


# -- screens ------------------------------------------------------------------


def _menu_screen(nav: Navigator, session: _Session) -> None:
    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Start    ")
    opts.append("Q", style="dim bold")
    opts.append("  Exit", style="dim")

    _print_panel(
        Group(Text(""), Align.center(opts), Text("")),
        "[bold]P I C T U R E   P U Z Z L E[/bold]",
    )

    key = get_key()
    if key in ("1", "enter"):
        nav.send(Event.PLAY)
    elif key == "quit":
        nav.send(Event.QUIT)


def _difficulty_screen(nav: Navigator, session: _Session) -> None:
    sizes = Text()
    for i, s in enumerate(session.sizes):
        if i:
            sizes.append("  ")
        if s == session.sel_size:
            sizes.append(f" {_size_label(s)} ", style="bold green on #313244")
        else:
            sizes.append(f" {_size_label(s)} ", style="dim")

    tiles = Text(
        f"{session.sel_size * session.sel_size - 1} movable tiles", style="dim"
    )
    _print_panel(
        Group(Text(""), Align.center(sizes), Align.center(tiles), Text("")),
        "[bold]Select difficulty[/bold]",
    )
    console.print(
        Align.center(
            _controls(("← →", "change"), ("Enter", "select"), ("Q", "back"))
        )
    )

    key = get_key()
    idx = session.sizes.index(session.sel_size)
    if key == "left":
        session.sel_size = session.sizes[max(0, idx - 1)]
    elif key == "right":
        session.sel_size = session.sizes[min(len(session.sizes) - 1, idx + 1)]
    elif key == "enter":
        nav.send(Event.SELECT_DIFFICULTY)
    elif key in ("quit", "back"):
        nav.send(Event.BACK)


def _picker_screen(nav: Navigator, session: _Session) -> None:
    choices = _image_choices(session)
    session.sel_image = min(session.sel_image, len(choices) - 1)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column()
    for i, name in enumerate(choices):
        if i == session.sel_image:
            table.add_row(Text(f"▸ {name}", style="bold green"))
        else:
            table.add_row(Text(f"  {name}", style="dim"))

    _print_panel(
        Group(Align.center(table), Text(""),
              Align.center(Text(str(session.images_dir), style="dim"))),
        "[bold]Select a picture[/bold]",
    )
    _print_status(session)
    console.print(
        Align.center(
            _controls(("↑ ↓", "choose"), ("Enter", "open"), ("Q", "back"))
        )
    )

    key = get_key()
    if key == "up":
        session.sel_image = max(0, session.sel_image - 1)
    elif key == "down":
        session.sel_image = min(len(choices) - 1, session.sel_image + 1)
    elif key == "enter":
        try:
            if session.sel_image == 0:
                picture = sample_image()
            else:
                picture = load_image(session.images_dir / choices[session.sel_image])
            _start_game(session, picture)
        except InvalidImageError as exc:
            logger.warning("Cannot use picture: %s", exc)
            session.status = f"[red]{exc}[/red]"
            return
        nav.send(Event.SELECT_IMAGE)
        _check_win(nav, session)
    elif key in ("quit", "back"):
        nav.send(Event.BACK)


def _start_game(session: _Session, picture: Image.Image) -> None:
    """Partition *picture* and deal a new game at the selected size."""
    pieces = partition(picture, session.sel_size)
    session.picture = crop_to_square(picture)
    session.game = GamePlay(
        pieces,
        session.sel_size,
        rng=session.rng,
        ensure_solvable=session.ensure_solvable,
    )
    _prepare_pixels(session)


def _check_win(nav: Navigator, session: _Session) -> None:
    game = session.game
    if game is not None and nav.report_solved(game.is_won):
        logger.info("Puzzle solved in %d moves", game.state.moves)


def _game_screen(nav: Navigator, session: _Session) -> None:
    game = session.game
    assert game is not None and session.picture is not None

    size = game.size
    board = _render_board(game.puzzle, session.pixels)

    side = Table.grid(padding=(0, 3))
    side.add_column()
    side.add_column(vertical="top")
    side.add_row(
        board,
        Group(
            Text("Reference", style="dim"),
            _render_picture(session.picture, REF_CHARS),
        ),
    )

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")

    _print_panel(
        side, f"[bold cyan]Picture Puzzle  {size}×{size}[/bold cyan]"
    )
    console.print(Align.center(stats))
    _print_status(session)
    console.print(
        Align.center(
            _controls(
                ("↑↓←→ / WASD", "slide"),
                ("R", "scramble"),
                ("Q", "back"),
            )
        )
    )

    key = get_key()
    if key in _DIRECTIONS:
        result = game.move(_DIRECTIONS[key])
        if not result.applied:
            session.status = "[dim]No tile can slide that way.[/dim]"
        _check_win(nav, session)
    elif key == "restart":
        game.rescramble(session.rng)
        session.status = "[yellow]Scrambled![/yellow]"
        _check_win(nav, session)
    elif key in ("quit", "back"):
        nav.send(Event.BACK)


def _win_screen(nav: Navigator, session: _Session) -> None:
    game = session.game
    assert game is not None and session.picture is not None

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You have completed the puzzle!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")

    _print_panel(
        Group(
            Align.center(_render_picture(session.picture, BOARD_CHARS)),
            Align.center(congrats),
            Align.center(stats),
        ),
        f"[bold green]Picture Puzzle  {game.size}×{game.size}[/bold green]",
        style="bold green",
    )
    console.print(
        Align.center(_controls(("R", "play again"), ("M", "main menu")))
    )

    key = get_key()
    if key in ("restart", "enter"):
        nav.send(Event.PLAY_AGAIN)
    elif key in ("menu", "quit"):
        nav.send(Event.MAIN_MENU)


_SCREENS = {
    Screen.MENU: _menu_screen,
    Screen.DIFFICULTY: _difficulty_screen,
    Screen.IMAGE_PICKER: _picker_screen,
    Screen.GAME: _game_screen,
    Screen.WIN: _win_screen,
}


# -- public entry point -------------------------------------------------------


def run(
    size: int = 3,
    images_dir: Path = Path("images"),
    image: Path | None = None,
    ensure_solvable: bool = True,
    seed: int | None = None,
) -> None:
    """Launch the Rich CLI.

    With *image* the menus are skipped and the game starts right away.
    """
    sizes = sorted({d.size for d in Difficulty} | {size})
    session = _Session(
        sizes=sizes,
        sel_size=size,
        images_dir=images_dir,
        ensure_solvable=ensure_solvable,
        rng=random.Random(seed),
    )
    nav = Navigator()

    if image is not None:
        _start_game(session, load_image(image))
        nav.send(Event.PLAY)
        nav.send(Event.SELECT_DIFFICULTY)
        nav.send(Event.SELECT_IMAGE)
        _check_win(nav, session)

    while not nav.finished:
        _SCREENS[nav.screen](nav, session)

    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
