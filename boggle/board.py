from __future__ import annotations

import math
from typing import Iterator, NamedTuple, Sequence

import numpy as np

from boggle.errors import InvalidArgument

# Search depth is at most N*N frames; keep it under the default recursion limit
MAX_BOARD_SIZE = 20

DEFAULT_TILES = [
    "E", "E", "C", "A",
    "A", "L", "E", "P",
    "H", "N", "B", "O",
    "Q", "T", "T", "Y",
]


class Position(NamedTuple):
    row: int
    col: int


class Board:
    """Square grid of letter tiles plus per-cell visitation flags for one DFS."""

    def __init__(self, tiles: Sequence[str] | None = None):
        self.size: int = 0
        self._tiles = np.empty((0, 0), dtype=object)
        self._visited = np.zeros((0, 0), dtype=bool)
        self.set_cells(DEFAULT_TILES if tiles is None else tiles)

    def set_cells(self, tiles: Sequence[str]):
        """Lay ``tiles`` out row-major on an NxN grid and clear all visitation flags."""
        if tiles is None:
            raise InvalidArgument("board tiles are required")
        tiles = list(tiles)
        n = math.isqrt(len(tiles))
        if n == 0 or n * n != len(tiles):
            raise InvalidArgument(f"Board needs a perfect-square number of tiles, got {len(tiles)}")
        if n > MAX_BOARD_SIZE:
            raise InvalidArgument(f"Board is {n}x{n}, largest supported is {MAX_BOARD_SIZE}x{MAX_BOARD_SIZE}")
        for idx, tile in enumerate(tiles):
            if not isinstance(tile, str) or not tile:
                raise InvalidArgument(f"Invalid tile {tile!r} at position {idx}")

        grid = np.empty((n, n), dtype=object)
        for idx, tile in enumerate(tiles):
            grid[divmod(idx, n)] = tile

        self.size = n
        self._tiles = grid
        self._visited = np.zeros((n, n), dtype=bool)

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def rows(self) -> list[list[str]]:
        return [list(row) for row in self._tiles]

    def positions(self) -> Iterator[Position]:
        for r in range(self.size):
            for c in range(self.size):
                yield Position(r, c)

    def index_of(self, pos: Position) -> int:
        return pos.row * self.size + pos.col

    def is_valid(self, pos: Position) -> bool:
        return 0 <= pos.row < self.size and 0 <= pos.col < self.size

    def letter_at(self, pos: Position) -> str:
        return self._tiles[pos.row, pos.col]

    def neighbors(self, pos: Position) -> list[Position]:
        """Up to eight in-bounds neighbours, scanned row-major around ``pos``."""
        result = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                p = Position(pos.row + dr, pos.col + dc)
                if self.is_valid(p):
                    result.append(p)
        return result

    def is_visited(self, pos: Position) -> bool:
        return bool(self._visited[pos.row, pos.col])

    def mark_visited(self, pos: Position):
        self._visited[pos.row, pos.col] = True

    def mark_unvisited(self, pos: Position):
        self._visited[pos.row, pos.col] = False

    def reset_visitation(self):
        self._visited.fill(False)

    def visited_count(self) -> int:
        return int(self._visited.sum())
