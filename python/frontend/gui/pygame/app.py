"""Pygame GUI frontend — picture puzzle with animated auto-solve.

The picture is cut into ``size × size`` pieces; each tile shows the piece
that belongs at its solved position. Without a picture the tiles fall back
to numbered squares. The main loop runs on asyncio so the auto-solve
replay can pace itself between frames.
"""

from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path

import pygame

from backend.config import MAX_SIZE, MIN_SIZE, GameConfig
from backend.engine.gameplay import GameSession
from backend.engine.gamestate import Status
from backend.models.board import Direction, tile_image_cell

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
WIN_W, WIN_H = 500, 700
TILE_GAP = 4
MARGIN = 20
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px
BOARD_Y = 76
FPS = 30
SIZE_CHOICES = range(MIN_SIZE, MAX_SIZE + 1)

_KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

_STATUS_COLOUR = {
    Status.SOLVED: COL_GREEN,
    Status.SOLVING: COL_BLUE,
    Status.SOLVE_FAILED: COL_RED,
}


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "enabled", "_hot")

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
        self.enabled = True
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        if not self.enabled:
            bg, fg = COL_SURFACE0, COL_OVERLAY0
        else:
            bg, fg = (self.hover if self._hot else self.bg), self.fg
        pygame.draw.rect(surf, bg, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, fg)
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
        return self.enabled and self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _pick_image(image: Path | None, images_dir: Path) -> Path | None:
    if image is not None:
        return image
    if not images_dir.is_dir():
        return None
    images = sorted(images_dir.glob("*.png"))
    return random.choice(images) if images else None


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    _REF_SIZE = 64  # reference thumbnail side length in px

    def __init__(self, config: GameConfig, image: Path | None, images_dir: Path) -> None:
        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")

        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._image_path = _pick_image(image, images_dir)
        self._full_image: pygame.Surface | None = None
        self._ref_image: pygame.Surface | None = None
        self._tile_images: dict[int, pygame.Surface] = {}
        self._tiles_for_size = 0
        self._load_image()

        self._session = GameSession(config)
        self._solve_task: asyncio.Task | None = None
        self._build_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_btns(self) -> None:
        bw, gap = 130, 10
        sx = _cx(3 * bw + 2 * gap)
        self._shuffle_btn = _Btn(
            (sx, 0, bw, 36), "SHUFFLE (N)", self._f_btn_sm,
            bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE,
        )
        self._reset_btn = _Btn(
            (sx + bw + gap, 0, bw, 36), "RESET (R)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._solve_btn = _Btn(
            (sx + 2 * (bw + gap), 0, bw, 36), "SOLVE (V)", self._f_btn_sm,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._action_btns = [self._shuffle_btn, self._reset_btn, self._solve_btn]

        sizes = SIZE_CHOICES
        sw, sgap = 56, 8
        sx = _cx(len(sizes) * sw + (len(sizes) - 1) * sgap)
        self._size_btns: dict[int, _Btn] = {
            s: _Btn((sx + i * (sw + sgap), 0, sw, 32), f"{s}×{s}", self._f_btn_sm)
            for i, s in enumerate(sizes)
        }

    # ── image tile preparation ──────────────────────────────────────────────

    def _load_image(self) -> None:
        if self._image_path is None:
            return
        try:
            self._full_image = pygame.image.load(str(self._image_path)).convert()
        except (pygame.error, FileNotFoundError) as exc:
            logger.warning("Could not load puzzle image %s: %s", self._image_path, exc)
            return
        self._ref_image = pygame.transform.smoothscale(
            self._full_image, (self._REF_SIZE, self._REF_SIZE)
        )

    def _prepare_tile_images(self) -> None:
        """Slice the picture into per-tile surfaces for the current size."""
        sz = self._session.size
        self._tiles_for_size = sz
        self._tile_images = {}
        if self._full_image is None:
            return

        tpx = self._tile_layout()[0]
        self._f_badge = pygame.font.SysFont("Helvetica", max(10, tpx // 5), bold=True)
        scaled = pygame.transform.smoothscale(self._full_image, (sz * tpx, sz * tpx))

        for val in range(1, sz * sz):
            tr, tc = tile_image_cell(val, sz)
            self._tile_images[val] = scaled.subsurface(
                pygame.Rect(tc * tpx, tr * tpx, tpx, tpx)
            ).copy()

    # ── helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def _fmt(seconds: int) -> str:
        m, s = divmod(seconds, 60)
        return f"{m:02d}:{s:02d}"

    def _tile_layout(self) -> tuple[int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_px) for current game."""
        sz = self._session.size
        tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        total = sz * tile_px + (sz + 1) * TILE_GAP
        ox = _cx(total) + TILE_GAP
        oy = BOARD_Y + TILE_GAP
        return tile_px, ox, oy, total

    def _tile_rect(self, index: int, tpx: int, ox: int, oy: int) -> pygame.Rect:
        r, c = divmod(index, self._session.size)
        return pygame.Rect(
            ox + c * (tpx + TILE_GAP),
            oy + r * (tpx + TILE_GAP),
            tpx,
            tpx,
        )

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw(self) -> None:
        session = self._session
        if self._tiles_for_size != session.size:
            self._prepare_tile_images()

        self._surf.fill(COL_BASE)
        board = session.board
        sz = session.size
        tpx, ox, oy, total = self._tile_layout()
        f_tile = pygame.font.SysFont("Helvetica", max(14, tpx // 3), bold=True)

        # header
        _blit_center(
            self._surf,
            self._f_title.render(f"Sliding Puzzle  {sz}×{sz}", True, COL_TEXT),
            14,
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Moves: {session.moves}    Time: {self._fmt(session.elapsed_seconds)}",
                True,
                COL_PINK,
            ),
            44,
        )

        # board bg
        frame = COL_GREEN if session.status is Status.SOLVED else COL_MANTLE
        pygame.draw.rect(
            self._surf,
            frame,
            pygame.Rect(_cx(total), BOARD_Y, total, total),
            border_radius=10,
        )

        # tiles
        for index, val in enumerate(board.tiles):
            if val == 0:
                continue
            rect = self._tile_rect(index, tpx, ox, oy)
            correct = board.is_tile_correct(index)
            if val in self._tile_images:
                self._surf.blit(self._tile_images[val], rect.topleft)
                num_lbl = self._f_badge.render(str(val), True, (255, 255, 255))
                badge = pygame.Surface(
                    (num_lbl.get_width() + 8, num_lbl.get_height() + 4), pygame.SRCALPHA
                )
                badge.fill((0, 0, 0, 150))
                badge.blit(num_lbl, (4, 2))
                self._surf.blit(badge, (rect.x + 2, rect.y + 2))
                if correct:
                    pygame.draw.rect(self._surf, COL_GREEN, rect, width=3, border_radius=4)
            else:
                pygame.draw.rect(
                    self._surf, COL_GREEN if correct else COL_BLUE, rect, border_radius=6
                )
                lbl = f_tile.render(str(val), True, COL_BASE)
                self._surf.blit(
                    lbl,
                    (
                        rect.centerx - lbl.get_width() // 2,
                        rect.centery - lbl.get_height() // 2,
                    ),
                )

        # reference image thumbnail (top-right)
        if self._ref_image is not None:
            rs = self._REF_SIZE
            rx = WIN_W - rs - MARGIN
            ry = 4
            pygame.draw.rect(
                self._surf, COL_SURFACE1,
                pygame.Rect(rx - 2, ry - 2, rs + 4, rs + 4),
                border_radius=6,
            )
            self._surf.blit(self._ref_image, (rx, ry))

        # action + size buttons
        enabled = session.controls_enabled
        self._solve_btn.enabled = enabled and not board.is_solved()
        btn_y = BOARD_Y + total + 10
        for btn in self._action_btns:
            btn.rect.y = btn_y
            btn.draw(self._surf)
        for s, btn in self._size_btns.items():
            btn.rect.y = btn_y + 46
            btn.bg = COL_LAVENDER if s == sz else COL_SURFACE0
            btn.fg = COL_BASE if s == sz else COL_TEXT
            btn.draw(self._surf)

        # status message
        footer_y = btn_y + 90
        message = session.status_message
        if message:
            colour = _STATUS_COLOUR.get(session.status, COL_YELLOW)
            _blit_center(self._surf, self._f_body.render(message, True, colour), footer_y)
        _blit_center(
            self._surf,
            self._f_small.render(
                "Click / Arrows / WASD  move     Esc  quit", True, COL_OVERLAY0
            ),
            footer_y + 26,
        )

    # ── event handling ──────────────────────────────────────────────────────

    def _handle(self, ev: pygame.event.Event) -> bool:
        session = self._session
        if ev.type == pygame.MOUSEMOTION:
            for btn in (*self._action_btns, *self._size_btns.values()):
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._shuffle_btn.hit(ev.pos):
                session.new_game()
            elif self._reset_btn.hit(ev.pos):
                session.reset_to_shuffle()
            elif self._solve_btn.hit(ev.pos):
                self._start_solve()
            else:
                for s, btn in self._size_btns.items():
                    if btn.hit(ev.pos):
                        session.new_game(s)
                        return True
                self._click_tile(ev.pos)
        elif ev.type == pygame.KEYDOWN:
            if ev.key in _KEY_DIRECTIONS:
                session.apply_direction(_KEY_DIRECTIONS[ev.key])
            elif ev.key == pygame.K_n:
                session.new_game()
            elif ev.key == pygame.K_r:
                session.reset_to_shuffle()
            elif ev.key == pygame.K_v:
                self._start_solve()
            elif ev.key in (pygame.K_ESCAPE, pygame.K_q):
                return False
        return True

    def _click_tile(self, pos: tuple[int, int]) -> None:
        tpx, ox, oy, _ = self._tile_layout()
        for index in range(len(self._session.board.tiles)):
            if self._tile_rect(index, tpx, ox, oy).collidepoint(pos):
                self._session.apply_manual_move(index)
                return

    def _start_solve(self) -> None:
        if self._session.controls_enabled:
            self._solve_task = asyncio.create_task(self._session.auto_solve())

    # ── main loop ───────────────────────────────────────────────────────────

    async def run_loop(self) -> None:
        running = True
        try:
            while running:
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT or not self._handle(ev):
                        running = False
                        break
                self._draw()
                pygame.display.flip()
                await asyncio.sleep(1 / FPS)
        finally:
            if self._solve_task is not None and not self._solve_task.done():
                self._solve_task.cancel()
            pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(config: GameConfig, image: Path | None = None, assets_dir: Path = Path("assets")) -> None:
    """Launch the Pygame GUI."""
    app = PygameApp(config, image, assets_dir / "images")
    asyncio.run(app.run_loop())
