"""Pygame GUI frontend — fully self-contained.

Includes main menu, difficulty selection, picture picker, gameplay and the
win screen.  Click a tile to select it, then press MOVE (or Space) to slide
it into the empty cell.  Arrow keys slide tiles directly.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

import pygame
from PIL import Image

from backend.engine.gameplay import GamePlay
from backend.engine.navigation import Event, Navigator, Screen
from backend.engine.partitioner import (
    crop_to_square,
    find_images,
    load_image,
    partition,
    sample_image,
)
from backend.models import Difficulty, Direction, InvalidImageError, RejectReason

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 520, 680
TILE_GAP = 3
MARGIN = 20
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px
BOARD_Y = 84
REF_SIZE = 56  # reference thumbnail side length in px
MAX_PICKER_ROWS = 8

_SAMPLE_LABEL = "Built-in picture"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _to_surface(image: Image.Image, side: int) -> pygame.Surface:
    """Convert a Pillow image into a ``side``×``side`` pygame surface."""
    scaled = image.convert("RGB").resize((side, side), Image.Resampling.LANCZOS)
    return pygame.image.frombytes(scaled.tobytes(), scaled.size, "RGB")


def _size_label(size: int) -> str:
    difficulty = Difficulty.from_size(size)
    name = difficulty.value.capitalize() if difficulty else "Custom"
    return f"{name} {size}×{size}"


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self,
        default_size: int,
        images_dir: Path,
        *,
        ensure_solvable: bool = True,
        seed: int | None = None,
    ) -> None:
        self._images_dir = images_dir
        self._ensure_solvable = ensure_solvable
        self._rng = random.Random(seed)
        self._sizes = sorted({d.size for d in Difficulty} | {default_size})
        self._sel_size = default_size

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Picture Puzzle")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._nav = Navigator()
        self._game: GamePlay | None = None
        self._picture: Image.Image | None = None
        self._tile_images: dict[int, pygame.Surface] = {}
        self._ref_image: pygame.Surface | None = None
        self._win_image: pygame.Surface | None = None
        self._selected: int | None = None
        self._status_msg: str = ""

        self._build_menu_btns()
        self._build_difficulty_btns()
        self._build_game_btns()
        self._build_win_btns()
        self._picker_btns: list[_Btn] = []
        self._picker_sources: list[Path | None] = []

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw = 220
        self._start_btn = _Btn(
            (_cx(bw), 300, bw, 50),
            "S T A R T",
            self._f_btn,
            bg=COL_BLUE,
            hover=COL_LAVENDER,
            fg=COL_BASE,
        )
        self._exit_btn = _Btn(
            (_cx(bw), 366, bw, 46),
            "E X I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )

    def _build_difficulty_btns(self) -> None:
        bw, bh, gap = 220, 46, 12
        self._size_btns: dict[int, _Btn] = {}
        for i, s in enumerate(self._sizes):
            self._size_btns[s] = _Btn(
                (_cx(bw), 200 + i * (bh + gap), bw, bh),
                _size_label(s),
                self._f_btn_sm,
            )
        self._diff_back = _Btn(
            (_cx(180), WIN_H - 84, 180, 46), "B A C K", self._f_btn_sm
        )

    def _build_picker_btns(self) -> None:
        bw, bh, gap = 320, 40, 8
        sources: list[Path | None] = [None, *find_images(self._images_dir)]
        self._picker_sources = sources[:MAX_PICKER_ROWS]
        self._picker_btns = []
        for i, src in enumerate(self._picker_sources):
            self._picker_btns.append(
                _Btn(
                    (_cx(bw), 130 + i * (bh + gap), bw, bh),
                    _SAMPLE_LABEL if src is None else src.name,
                    self._f_btn_sm,
                )
            )
        self._picker_back = _Btn(
            (_cx(180), WIN_H - 84, 180, 46), "B A C K", self._f_btn_sm
        )

    def _build_game_btns(self) -> None:
        """In-game action buttons (placed below the board)."""
        bw, gap = 130, 10
        sx = _cx(3 * bw + 2 * gap)
        self._move_btn = _Btn(
            (sx, 0, bw, 40), "MOVE (SPACE)", self._f_btn_sm,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._scramble_btn = _Btn(
            (sx + bw + gap, 0, bw, 40), "SCRAMBLE (R)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._game_back = _Btn(
            (sx + 2 * (bw + gap), 0, bw, 40), "BACK (ESC)", self._f_btn_sm,
        )
        self._game_btns = [self._move_btn, self._scramble_btn, self._game_back]

    def _build_win_btns(self) -> None:
        bw = 220
        self._win_again = _Btn(
            (_cx(bw), 520, bw, 50),
            "PLAY AGAIN",
            self._f_btn,
            bg=COL_GREEN,
            hover=(190, 240, 190),
            fg=COL_BASE,
        )
        self._win_menu = _Btn(
            (_cx(bw), 586, bw, 46), "M E N U", self._f_btn_sm
        )

    # ── layout ──────────────────────────────────────────────────────────────

    def _tile_layout(self) -> tuple[int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_px) for current game."""
        sz = self._game.size  # type: ignore[union-attr]
        tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        total = sz * tile_px + (sz + 1) * TILE_GAP
        ox = _cx(total) + TILE_GAP
        oy = BOARD_Y + TILE_GAP
        return tile_px, ox, oy, total

    def _cell_rect(self, position: int, tpx: int, ox: int, oy: int) -> pygame.Rect:
        r, c = divmod(position, self._game.size)  # type: ignore[union-attr]
        return pygame.Rect(
            ox + c * (tpx + TILE_GAP),
            oy + r * (tpx + TILE_GAP),
            tpx,
            tpx,
        )

    # ── game setup ──────────────────────────────────────────────────────────

    def _start_game(self, picture: Image.Image) -> None:
        pieces = partition(picture, self._sel_size)
        self._picture = crop_to_square(picture)
        self._game = GamePlay(
            pieces,
            self._sel_size,
            rng=self._rng,
            ensure_solvable=self._ensure_solvable,
        )
        self._selected = None
        self._status_msg = ""

        tpx, _, _, _ = self._tile_layout()
        self._tile_images = {
            tile.correct_position: _to_surface(tile.image, tpx)
            for tile in self._game.puzzle.tiles
        }
        self._ref_image = _to_surface(self._picture, REF_SIZE)
        self._win_image = _to_surface(self._picture, 300)

    def _open_picture(self, source: Path | None) -> None:
        try:
            picture = sample_image() if source is None else load_image(source)
            self._start_game(picture)
        except InvalidImageError as exc:
            logger.warning("Cannot use picture: %s", exc)
            self._status_msg = str(exc)
            return
        self._nav.send(Event.SELECT_IMAGE)
        self._check_win()

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf,
            self._f_big.render("PICTURE  PUZZLE", True, COL_TEXT),
            120,
        )
        _blit_center(
            self._surf,
            self._f_body.render("Slide the tiles back into place", True, COL_SUBTEXT),
            180,
        )
        self._start_btn.draw(self._surf)
        self._exit_btn.draw(self._surf)

    def _draw_difficulty(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf,
            self._f_title.render("Select difficulty", True, COL_TEXT),
            120,
        )
        for s, btn in self._size_btns.items():
            btn.bg = COL_GREEN if s == self._sel_size else COL_SURFACE0
            btn.fg = COL_BASE if s == self._sel_size else COL_TEXT
            btn.draw(self._surf)
        self._diff_back.draw(self._surf)

    def _draw_picker(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf,
            self._f_title.render("Select a picture", True, COL_TEXT),
            60,
        )
        _blit_center(
            self._surf,
            self._f_small.render(str(self._images_dir), True, COL_OVERLAY0),
            96,
        )
        for btn in self._picker_btns:
            btn.draw(self._surf)
        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_RED),
                WIN_H - 120,
            )
        self._picker_back.draw(self._surf)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        sz = game.size
        tpx, ox, oy, total = self._tile_layout()

        # header
        _blit_center(
            self._surf,
            self._f_title.render(f"Picture Puzzle  {sz}×{sz}", True, COL_TEXT),
            14,
        )
        _blit_center(
            self._surf,
            self._f_body.render(f"Moves: {game.state.moves}", True, COL_PINK),
            46,
        )

        # board bg
        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total), BOARD_Y, total, total),
            border_radius=10,
        )

        # tiles
        for index, tile in enumerate(game.puzzle.tiles):
            rect = self._cell_rect(tile.current_position, tpx, ox, oy)
            self._surf.blit(self._tile_images[tile.correct_position], rect.topleft)
            if index == self._selected:
                pygame.draw.rect(
                    self._surf, COL_PINK, rect, width=4, border_radius=4
                )

        # reference image thumbnail (top-right)
        if self._ref_image is not None:
            rx = WIN_W - REF_SIZE - MARGIN
            ry = 10
            pygame.draw.rect(
                self._surf, COL_SURFACE1,
                pygame.Rect(rx - 2, ry - 2, REF_SIZE + 4, REF_SIZE + 4),
                border_radius=6,
            )
            self._surf.blit(self._ref_image, (rx, ry))

        # action buttons row
        btn_y = BOARD_Y + total + 14
        for btn in self._game_btns:
            btn.rect.y = btn_y
            btn.draw(self._surf)

        footer_y = btn_y + 54
        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_YELLOW),
                footer_y,
            )
            footer_y += 22

        _blit_center(
            self._surf,
            self._f_small.render(
                "Click a tile, then MOVE     Arrows / WASD  slide", True, COL_OVERLAY0
            ),
            footer_y,
        )

    def _draw_win(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None

        _blit_center(
            self._surf,
            self._f_big.render("Congratulations!", True, COL_GREEN),
            40,
        )
        _blit_center(
            self._surf,
            self._f_body.render("You have completed the puzzle!", True, COL_TEXT),
            94,
        )
        if self._win_image is not None:
            _blit_center(self._surf, self._win_image, 130)
        _blit_center(
            self._surf,
            self._f_title.render(f"Moves:  {game.state.moves}", True, COL_YELLOW),
            450,
        )
        self._win_again.draw(self._surf)
        self._win_menu.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.MOUSEMOTION:
            self._start_btn.motion(ev.pos)
            self._exit_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._start_btn.hit(ev.pos):
                self._nav.send(Event.PLAY)
            elif self._exit_btn.hit(ev.pos):
                self._nav.send(Event.QUIT)
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._nav.send(Event.PLAY)
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                self._nav.send(Event.QUIT)

    def _ev_difficulty(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.MOUSEMOTION:
            for b in (*self._size_btns.values(), self._diff_back):
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for s, b in self._size_btns.items():
                if b.hit(ev.pos):
                    self._sel_size = s
                    self._choose_difficulty()
                    return
            if self._diff_back.hit(ev.pos):
                self._nav.send(Event.BACK)
        elif ev.type == pygame.KEYDOWN:
            idx = self._sizes.index(self._sel_size)
            if ev.key in (pygame.K_UP, pygame.K_w):
                self._sel_size = self._sizes[max(0, idx - 1)]
            elif ev.key in (pygame.K_DOWN, pygame.K_s):
                self._sel_size = self._sizes[min(len(self._sizes) - 1, idx + 1)]
            elif ev.key == pygame.K_RETURN:
                self._choose_difficulty()
            elif ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                self._nav.send(Event.BACK)

    def _choose_difficulty(self) -> None:
        self._build_picker_btns()
        self._status_msg = ""
        self._nav.send(Event.SELECT_DIFFICULTY)

    def _ev_picker(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.MOUSEMOTION:
            for b in (*self._picker_btns, self._picker_back):
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for src, b in zip(self._picker_sources, self._picker_btns):
                if b.hit(ev.pos):
                    self._open_picture(src)
                    return
            if self._picker_back.hit(ev.pos):
                self._nav.send(Event.BACK)
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._open_picture(None)
            elif ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                self._nav.send(Event.BACK)

    def _ev_game(self, ev: pygame.event.Event) -> None:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_btns:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._move_btn.hit(ev.pos):
                self._move_selected()
                return
            if self._scramble_btn.hit(ev.pos):
                self._do_scramble()
                return
            if self._game_back.hit(ev.pos):
                self._nav.send(Event.BACK)
                return
            tpx, ox, oy, _ = self._tile_layout()
            for index, tile in enumerate(game.puzzle.tiles):
                if self._cell_rect(tile.current_position, tpx, ox, oy).collidepoint(ev.pos):
                    self._selected = index
                    self._status_msg = ""
                    return
        elif ev.type == pygame.KEYDOWN:
            _dirs = {
                pygame.K_UP: Direction.UP,
                pygame.K_w: Direction.UP,
                pygame.K_DOWN: Direction.DOWN,
                pygame.K_s: Direction.DOWN,
                pygame.K_LEFT: Direction.LEFT,
                pygame.K_a: Direction.LEFT,
                pygame.K_RIGHT: Direction.RIGHT,
                pygame.K_d: Direction.RIGHT,
            }
            if ev.key in _dirs:
                result = game.move(_dirs[ev.key])
                self._selected = None
                self._status_msg = "" if result.applied else "No tile can slide that way"
                self._check_win()
            elif ev.key == pygame.K_SPACE:
                self._move_selected()
            elif ev.key == pygame.K_r:
                self._do_scramble()
            elif ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                self._nav.send(Event.BACK)

    def _ev_win(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.MOUSEMOTION:
            self._win_again.motion(ev.pos)
            self._win_menu.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._win_again.hit(ev.pos):
                self._play_again()
            elif self._win_menu.hit(ev.pos):
                self._nav.send(Event.MAIN_MENU)
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._play_again()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._nav.send(Event.MAIN_MENU)

    # ── game actions ────────────────────────────────────────────────────────

    def _move_selected(self) -> None:
        game = self._game
        assert game is not None
        if self._selected is None:
            self._status_msg = "Select a tile first"
            return
        result = game.attempt_move(self._selected)
        if result.applied:
            self._selected = None
            self._status_msg = ""
            self._check_win()
        elif result.reason is RejectReason.NOT_ADJACENT:
            self._status_msg = "That tile is not next to the empty cell"

    def _do_scramble(self) -> None:
        game = self._game
        assert game is not None
        game.rescramble(self._rng)
        self._selected = None
        self._status_msg = "Scrambled!"
        self._check_win()

    def _play_again(self) -> None:
        self._build_picker_btns()
        self._status_msg = ""
        self._nav.send(Event.PLAY_AGAIN)

    def _check_win(self) -> None:
        game = self._game
        if game is not None and self._nav.report_solved(game.is_won):
            logger.info("Puzzle solved in %d moves", game.state.moves)

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            Screen.MENU: self._ev_menu,
            Screen.DIFFICULTY: self._ev_difficulty,
            Screen.IMAGE_PICKER: self._ev_picker,
            Screen.GAME: self._ev_game,
            Screen.WIN: self._ev_win,
        }
        _draw = {
            Screen.MENU: self._draw_menu,
            Screen.DIFFICULTY: self._draw_difficulty,
            Screen.IMAGE_PICKER: self._draw_picker,
            Screen.GAME: self._draw_game,
            Screen.WIN: self._draw_win,
        }

        while not self._nav.finished:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    pygame.quit()
                    return
                _dispatch[self._nav.screen](ev)
                if self._nav.finished:
                    break

            if self._nav.finished:
                break
            _draw[self._nav.screen]()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()

    def start_with(self, picture: Image.Image) -> None:
        """Skip the menus and open a game on *picture*."""
        self._start_game(picture)
        self._nav.send(Event.PLAY)
        self._build_picker_btns()
        self._nav.send(Event.SELECT_DIFFICULTY)
        self._nav.send(Event.SELECT_IMAGE)
        self._check_win()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    size: int = 3,
    images_dir: Path = Path("images"),
    image: Path | None = None,
    ensure_solvable: bool = True,
    seed: int | None = None,
) -> None:
    """Launch the Pygame GUI (opens on the menu unless *image* is given)."""
    app = PygameApp(size, images_dir, ensure_solvable=ensure_solvable, seed=seed)
    if image is not None:
        app.start_with(load_image(image))
    app.run_loop()
