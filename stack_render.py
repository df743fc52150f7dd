
"""
Rendering helpers for the stacking game host.

Read-only projection of a GameSession:
- Pre-render one cell Surface per color tag (solid + ghost outline) and blit them.
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* cells; rebuild it only when the
  playfield snapshot changes (lock, line clear, reset).
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional

from stack_config import CONFIG
from stack_piece import ShapeDef
from stack_session import GameSession

# RGB per color tag
COLORS: Dict[str, Tuple[int,int,int]] = {
    "cyan": (102,224,255),
    "yellow": (255,224,102),
    "purple": (200,119,255),
    "green": (94,224,142),
    "red": (255,102,119),
    "blue": (106,119,255),
    "orange": (255,158,94),
}

BG = (10,13,34)
TEXT = (200,210,240)
DIM_TEXT = (165,175,215)

@dataclass(frozen=True)
class Dims:
    """Pixel geometry: board on the left, side panel on the right."""
    cols: int
    rows: int
    cell: int
    margin: int = 16
    panel_w: int = 220

    @classmethod
    def for_grid(cls, cols: Optional[int] = None, rows: Optional[int] = None) -> Dims:
        return cls(CONFIG["COLS"] if cols is None else cols,
                   CONFIG["ROWS"] if rows is None else rows,
                   int(CONFIG["CELL_SIZE"]))

    board_x = property(lambda self: self.margin)
    board_y = property(lambda self: self.margin)
    board_w = property(lambda self: self.cols * self.cell)
    board_h = property(lambda self: self.rows * self.cell)
    panel_x = property(lambda self: self.board_x + self.board_w + self.margin)
    panel_y = property(lambda self: self.margin)
    total_w = property(lambda self: self.panel_x + self.panel_w + self.margin)
    total_h = property(lambda self: self.board_h + 2 * self.margin)

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    best: int = -1
    next_kind: Optional[str] = None
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    best_s: Optional[pygame.Surface] = None
    next_preview: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: Optional[pygame.font.Font] = None):
        self.dims = dims
        self.font = font
        self.big_font = big_font or font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        # Board surface cache (only locked cells)
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_key = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        grid_col = (40,50,90)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        # Next preview frame
        self.pv_cell = max(14, int(d.cell*0.75))
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 174
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*4+12, self.pv_cell*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for tag, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[tag] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[tag] = g

    # ---------- Board surface cache ----------
    def sync_board(self, session: GameSession) -> bool:
        """Rebuild the locked-cell surface if the playfield changed. True if rebuilt."""
        key = session.grid()
        if key == self._board_key:
            return False
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(key):
            for x, tag in enumerate(row):
                if tag:
                    self.board_surface.blit(self.cell_surf[tag], (x*c + 1, y*c + 1))
        self._board_key = key
        return True

    # ---------- Per-cell helpers for falling/ghost piece ----------
    def draw_cell(self, screen: pygame.Surface, tag: str, bx: int, by: int):
        rx = self.dims.board_x + bx*self.dims.cell + 1
        ry = self.dims.board_y + by*self.dims.cell + 1
        screen.blit(self.cell_surf[tag], (rx, ry))

    def draw_ghost_cell(self, screen: pygame.Surface, tag: str, bx: int, by: int):
        rx = self.dims.board_x + bx*self.dims.cell + 4
        ry = self.dims.board_y + by*self.dims.cell + 4
        screen.blit(self.ghost_surf[tag], (rx, ry))

    # ---------- Full frame ----------
    def draw(self, screen: pygame.Surface, session: GameSession, best: int = 0):
        d = self.dims
        self.sync_board(session)
        screen.blit(self.bg, (0,0))
        screen.blit(self.board_surface, (d.board_x, d.board_y))
        p = session.piece
        if p is not None:
            gy = session.ghost_y()
            if gy != p.y:
                for x, y in p.cells():
                    if y - p.y + gy >= 0:
                        self.draw_ghost_cell(screen, p.color, x, y - p.y + gy)
            for x, y in p.cells():
                if y >= 0:
                    self.draw_cell(screen, p.color, x, y)
        self.draw_panel_hud(screen, session.score, session.level, session.lines,
                            session.next_definition(), best)
        if session.over:
            self._banner(screen, "GAME OVER (R to Restart)", (255,220,220))
        elif session.paused:
            self._banner(screen, "PAUSED (P to Resume)", (220,240,255))
        elif not session.playing:
            self._banner(screen, "ENTER to Start", (220,240,255))

    def _banner(self, screen: pygame.Surface, text: str, color):
        d = self.dims
        msg = self.big_font.render(text, True, color)
        rect = msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2))
        screen.blit(msg, rect)

    # ---------- HUD / Panel ----------
    def _preview(self, shape: ShapeDef) -> pygame.Surface:
        s = pygame.Surface((self.pv_cell*4, self.pv_cell*4), pygame.SRCALPHA)
        m = shape.matrix
        offx = (4 - len(m[0])) // 2
        offy = max(0, (4 - len(m)) // 2)
        block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
        block.fill(COLORS[shape.color])
        for y, row in enumerate(m):
            for x, v in enumerate(row):
                if v:
                    s.blit(block, ((x + offx) * self.pv_cell + 1, (y + offy) * self.pv_cell + 1))
        return s

    def draw_panel_hud(self, screen: pygame.Surface, score: int, level: int, lines: int,
                       next_shape: Optional[ShapeDef], best: int = 0):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Stacker", True, (197,202,233))
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score}", True, TEXT)
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, TEXT)
        if lines != self.hud.lines:
            self.hud.lines = lines
            self.hud.lines_s = f.render(f"Lines: {lines}", True, TEXT)
        if best != self.hud.best:
            self.hud.best = best
            self.hud.best_s = f.render(f"Best: {best}", True, TEXT)
        next_kind = next_shape.kind if next_shape else None
        if next_kind != self.hud.next_kind:
            self.hud.next_kind = next_kind
            self.hud.next_preview = self._preview(next_shape) if next_shape else None
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(self.hud.best_s, (d.panel_x + 12, d.panel_y + 116))
        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, d.panel_y + 150))
        if self.hud.next_preview:
            screen.blit(self.hud.next_preview, (self.pv_x, self.pv_y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, TEXT),
                f.render("←/→ Move", True, DIM_TEXT),
                f.render("↓ Soft drop", True, DIM_TEXT),
                f.render("↑ Rotate", True, DIM_TEXT),
                f.render("Space Hard drop", True, DIM_TEXT),
                f.render("Enter Start", True, DIM_TEXT),
                f.render("P Pause • R Restart", True, DIM_TEXT),
            ]
        y = d.panel_y + 284
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20
