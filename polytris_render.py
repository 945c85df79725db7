"""
Rendering helpers for Polytris.

- Pre-render block cell Surfaces per piece type (normal + ghost outline);
  rebuilt when a new round brings a new colour map.
- Pre-render static background (grid + panel frame).
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuilt only when the
  session hands out a new board object (lock / line clear / reset).
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional
from polytris_layout import Dims
from polytris_config import COLS, ROWS, MAX_SHAPE_SIZE
from polytris_geometry import Shape, filled_cells, normalize
from polytris_session import SessionState, ghost_piece

TEXT = (200, 210, 240)
DIM_TEXT = (165, 175, 215)

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self.hud = HudCache()
        self.colors: Dict[int, pygame.Color] = {}
        self.cell_surf: Dict[int, pygame.Surface] = {}
        self.ghost_surf: Dict[int, pygame.Surface] = {}
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_src = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.total_h - 2*d.margin)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        # Next preview frame
        self.nx_cell = max(14, int(d.cell*0.75))
        self.nx_x = d.panel_x + 12
        self.nx_y = d.panel_y + 150
        side = self.nx_cell*MAX_SHAPE_SIZE
        frame = pygame.Rect(self.nx_x-6, self.nx_y-6, side+12, side+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)
        self.catalog_y = self.nx_y + side + 44

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def set_colors(self, colors: Dict[int, pygame.Color]):
        """Re-skin for a new round; no-op if the map is unchanged."""
        if colors is self.colors:
            return
        self.colors = colors
        self.cell_surf.clear()
        self.ghost_surf.clear()
        c = self.dims.cell
        for t, col in colors.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[t] = g
        self._board_src = None

    def redraw_static(self, screen: pygame.Surface):
        screen.blit(self.bg, (0,0))

    # ---------- Board surface cache ----------
    def board_for(self, board: List[List[int]]):
        """Rebuild the locked-blocks surface when the board object changes."""
        if board is self._board_src:
            return
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(board):
            for x, t in enumerate(row):
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))
        self._board_src = board

    def blit_board_surface(self, screen: pygame.Surface):
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))

    # ---------- Moving / ghost piece ----------
    def draw_piece(self, screen: pygame.Surface, piece, ghost: bool = False):
        d = self.dims
        sprites, inset = (self.ghost_surf, 4) if ghost else (self.cell_surf, 1)
        for x, y in filled_cells(piece.shape):
            bx, by = piece.x + x, piece.y + y
            if by < 0:
                continue
            screen.blit(sprites[piece.type], (d.board_x + bx*d.cell + inset, d.board_y + by*d.cell + inset))

    def _mini(self, screen: pygame.Surface, shape: Shape, t: int, x0: int, y0: int, cell: int):
        """Draw a cropped shape centred in a MAX_SHAPE_SIZE square box."""
        shape = normalize(shape)
        offx = (MAX_SHAPE_SIZE - len(shape[0])) * cell // 2
        offy = (MAX_SHAPE_SIZE - len(shape)) * cell // 2
        for x, y in filled_cells(shape):
            pygame.draw.rect(screen, self.colors[t], (x0 + offx + x*cell + 1, y0 + offy + y*cell + 1, cell-2, cell-2))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, state: SessionState):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Polytris", True, (197,202,233))
        if state.score != self.hud.score:
            self.hud.score = state.score
            self.hud.score_s = f.render(f"Score: {state.score}", True, TEXT)
        if state.level != self.hud.level:
            self.hud.level = state.level
            self.hud.level_s = f.render(f"Level: {state.level}", True, TEXT)
        if state.lines != self.hud.lines:
            self.hud.lines = state.lines
            self.hud.lines_s = f.render(f"Lines: {state.lines}", True, TEXT)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, d.panel_y + 126))
        if state.next is not None:
            self._mini(screen, state.next.shape, state.next.type, self.nx_x, self.nx_y, self.nx_cell)

        # This round's catalog
        screen.blit(f.render("This round:", True, TEXT), (d.panel_x + 12, self.catalog_y - 24))
        box = (MAX_SHAPE_SIZE + 1) * d.pv_cell
        for i, proto in enumerate(state.protos):
            col, row = i % d.catalog_cols, i // d.catalog_cols
            self._mini(screen, proto.shape, proto.type,
                       d.panel_x + 12 + col*box, self.catalog_y + row*box, d.pv_cell)

        if not self.hud.controls:
            self.hud.controls = [
                f.render("←/→ Move  ↓ Soft drop", True, DIM_TEXT),
                f.render("↑ Rotate  Space Hard drop", True, DIM_TEXT),
                f.render("R Restart", True, DIM_TEXT),
            ]
        y = d.total_h - d.margin - 8 - 20*len(self.hud.controls)
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    def draw(self, screen: pygame.Surface, state: SessionState):
        """Full frame from one state snapshot: background, locked blocks, ghost, active piece, HUD."""
        self.set_colors(state.colors)
        self.board_for(state.board)
        self.redraw_static(screen)
        self.blit_board_surface(screen)
        ghost = ghost_piece(state)
        if ghost is not None:
            self.draw_piece(screen, ghost, ghost=True)
        if state.current is not None:
            self.draw_piece(screen, state.current)
        self.draw_panel_hud(screen, state)
