from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, Sequence

from boggle.board import Board, Position
from boggle.errors import InvalidArgument, NotReadyError
from boggle.lexicon import Lexicon, load_lexicon

logger = logging.getLogger("boggle")


class SearchEngine:
    """Depth-first word search over a Board, pruned by Lexicon prefix queries.

    The board's visitation flags are shared by every frame of one search, so
    top-level searches on the same engine are serialized.
    """

    def __init__(self, lexicon: Lexicon | None = None, board: Board | None = None):
        self.lexicon = lexicon
        self.board = board if board is not None else Board()
        self.last_nodes = 0
        self._lock = threading.RLock()

    def load_lexicon(self, path: str | Path) -> Lexicon:
        self.lexicon = load_lexicon(path)
        return self.lexicon

    def set_board(self, tiles: Sequence[str]):
        with self._lock:
            self.board.set_cells(tiles)

    def get_board(self) -> str:
        return ", ".join(tile for row in self.board.rows() for tile in row)

    def _require_lexicon(self) -> Lexicon:
        if self.lexicon is None:
            raise NotReadyError("No lexicon loaded")
        return self.lexicon

    def is_valid_word(self, word: str) -> bool:
        if word is None:
            raise InvalidArgument("word is required")
        return self._require_lexicon().contains(word)

    def is_valid_prefix(self, prefix: str) -> bool:
        if prefix is None:
            raise InvalidArgument("prefix is required")
        return self._require_lexicon().has_prefix(prefix)

    # -- enumeration -------------------------------------------------------

    def find_all_words(self, min_length: int) -> list[str]:
        """Every lexicon word of at least ``min_length`` letters spelled by a simple path."""
        if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 1:
            raise InvalidArgument(f"min_length must be a positive integer, got {min_length!r}")
        lexicon = self._require_lexicon()

        with self._lock:
            board = self.board
            found: set[str] = set()
            self.last_nodes = 0

            def dfs(word: str, pos: Position):
                self.last_nodes += 1
                if not lexicon.has_prefix(word):
                    return
                if board.is_visited(pos):
                    return
                if len(word) >= min_length and lexicon.contains(word):
                    found.add(word)

                board.mark_visited(pos)
                for nbr in board.neighbors(pos):
                    dfs(word + board.letter_at(nbr).lower(), nbr)
                board.mark_unvisited(pos)

            for start in board.positions():
                board.reset_visitation()
                dfs(board.letter_at(start).lower(), start)

            logger.debug("find_all_words(min_length=%d): %d words, %d nodes",
                         min_length, len(found), self.last_nodes)
            return sorted(found)

    # -- path reconstruction -----------------------------------------------

    def locate_path(self, target: str) -> list[Position]:
        """First simple path found that spells ``target``, or an empty list.

        Start cells are tried row-major and neighbours in ``Board.neighbors``
        order, so the answer is deterministic for a given board.
        """
        if not target:
            raise InvalidArgument("target word is required")
        lexicon = self._require_lexicon()
        target = target.lower()

        with self._lock:
            board = self.board
            path: list[Position] = []
            self.last_nodes = 0

            def dfs(word: str, pos: Position) -> bool:
                self.last_nodes += 1
                if not lexicon.has_prefix(word) or len(word) > len(target):
                    return False
                if not target.startswith(word):
                    return False
                if board.is_visited(pos):
                    return False

                board.mark_visited(pos)
                path.append(pos)
                if word == target:
                    return True
                for nbr in board.neighbors(pos):
                    if dfs(word + board.letter_at(nbr).lower(), nbr):
                        return True
                board.mark_unvisited(pos)
                path.pop()
                return False

            for start in board.positions():
                tile = board.letter_at(start).lower()
                if tile[0] != target[0]:
                    continue
                board.reset_visitation()
                if dfs(tile, start):
                    break

            board.reset_visitation()
            logger.debug("locate_path(%r): %s after %d nodes",
                         target, "found" if path else "not found", self.last_nodes)
            return list(path)

    def locate_word(self, target: str) -> list[int]:
        """Linear indices (row * N + col) of the path spelling ``target``."""
        with self._lock:
            return [self.board.index_of(pos) for pos in self.locate_path(target)]

    # -- scoring -----------------------------------------------------------

    def score(self, words: Iterable[str], min_length: int) -> int:
        """Sum ``1 + len - min_length`` over each candidate that is on the board.

        Repeated candidates score once per occurrence.
        """
        if words is None:
            raise InvalidArgument("candidate words are required")
        valid = set(self.find_all_words(min_length))

        total = 0
        for word in words:
            if word is None:
                raise InvalidArgument("candidate words may not contain None")
            word = word.lower()
            if word in valid and len(word) >= min_length:
                total += 1 + len(word) - min_length
        return total
