
"""Playfield: validity, commit, row clearing"""
import logging
from typing import List, Optional, Sequence, Tuple

from stack_config import CONFIG

log = logging.getLogger(__name__)

Cell = Optional[str]
Grid = List[List[Cell]]


class Playfield:
    """Locked cells only. The falling piece is never written here before lock."""

    def __init__(self, cols: Optional[int] = None, rows: Optional[int] = None):
        self.cols = CONFIG["COLS"] if cols is None else cols
        self.rows = CONFIG["ROWS"] if rows is None else rows
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"playfield must be at least 1x1, got {self.cols}x{self.rows}")
        self.grid: Grid = [[None] * self.cols for _ in range(self.rows)]

    def reset(self) -> None:
        self.grid = [[None] * self.cols for _ in range(self.rows)]

    def cell(self, x: int, y: int) -> Cell:
        return self.grid[y][x]

    def is_empty(self) -> bool:
        return not any(any(row) for row in self.grid)

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self.grid)

    def is_valid_placement(self, matrix: Sequence[Sequence[int]], x: int, y: int) -> bool:
        """True if no occupied cell leaves [0, cols), reaches row >= rows, or
        lands on a locked cell. Rows above 0 skip the occupancy check."""
        for r, row in enumerate(matrix):
            for c, v in enumerate(row):
                if not v:
                    continue
                bx, by = x + c, y + r
                if bx < 0 or bx >= self.cols or by >= self.rows:
                    return False
                if by >= 0 and self.grid[by][bx] is not None:
                    return False
        return True

    def commit(self, matrix: Sequence[Sequence[int]], x: int, y: int, color: str) -> None:
        """Write the piece into the grid (caller validates). Rows above 0 are dropped."""
        assert self.is_valid_placement(matrix, x, y), "commit of an invalid placement"
        for r, row in enumerate(matrix):
            for c, v in enumerate(row):
                if v and y + r >= 0:
                    self.grid[y + r][x + c] = color

    def full_rows(self) -> List[int]:
        return [y for y, row in enumerate(self.grid) if all(v is not None for v in row)]

    def clear_full_rows(self) -> int:
        """Remove full rows, shift the rest down, refill at the top."""
        full = self.full_rows()
        if not full:
            return 0
        kept = [row for y, row in enumerate(self.grid) if y not in full]
        self.grid = [[None] * self.cols for _ in full] + kept
        log.debug("cleared %d row(s) at %s", len(full), full)
        return len(full)

    def landing_y(self, matrix: Sequence[Sequence[int]], x: int, y: int) -> int:
        """Lowest y reachable from (x, y) by straight drops."""
        while self.is_valid_placement(matrix, x, y + 1):
            y += 1
        return y
