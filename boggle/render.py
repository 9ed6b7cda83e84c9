from __future__ import annotations

from typing import Iterable

import cv2
import numpy as np

from boggle.board import Board


def board_to_text(board: Board) -> str:
    """Human-readable grid, one row per line with tiles padded to equal width."""
    rows = board.rows()
    width = max(len(tile) for row in rows for tile in row)
    return "\n".join(" ".join(tile.ljust(width) for tile in row).rstrip() for row in rows)


def board_to_dict(board: Board) -> dict:
    rows = board.rows()
    return {
        "size": board.size,
        "rows": rows,
        "tiles": [tile for row in rows for tile in row],
    }


def render_board_image(board: Board, cell_size: int = 80, highlight: Iterable[int] | None = None) -> np.ndarray:
    """Draw the board as a grayscale image: white cells, black grid, tile text centred.

    Cells whose linear index is in ``highlight`` are shaded gray.
    """
    n = board.size
    marked = set(highlight or ())
    img = np.ones((n * cell_size + 1, n * cell_size + 1), dtype=np.uint8) * 255

    for pos in board.positions():
        x1, y1 = pos.col * cell_size, pos.row * cell_size
        if board.index_of(pos) in marked:
            cv2.rectangle(img, (x1, y1), (x1 + cell_size, y1 + cell_size), 190, -1)

        text = board.letter_at(pos).upper()
        font_scale = cell_size / 80
        thickness = max(1, cell_size // 40)
        (tw, th), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, font_scale, thickness)
        tx = x1 + (cell_size - tw) // 2
        ty = y1 + (cell_size + th) // 2
        cv2.putText(img, text, (tx, ty), cv2.FONT_HERSHEY_SIMPLEX, font_scale, 0, thickness)

    for i in range(n + 1):
        edge = i * cell_size
        cv2.line(img, (0, edge), (n * cell_size, edge), 0, 1)
        cv2.line(img, (edge, 0), (edge, n * cell_size), 0, 1)

    return img


def encode_png(image: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", image)
    if not ok:
        raise RuntimeError("Could not encode board image as PNG")
    return buf.tobytes()
