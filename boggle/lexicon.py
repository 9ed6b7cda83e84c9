from __future__ import annotations

import logging
from bisect import bisect_left
from pathlib import Path
from typing import Iterable, Iterator

from boggle.errors import ConfigurationError, InvalidArgument

logger = logging.getLogger("boggle")


class Lexicon:
    """Sorted, lowercased word set supporting membership and prefix queries."""

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str] = ()):
        cleaned = {w.strip().lower() for w in words}
        cleaned.discard("")
        self._words: list[str] = sorted(cleaned)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def successor(self, text: str) -> str | None:
        """Smallest member that sorts at or after ``text``, or None."""
        if text is None:
            raise InvalidArgument("successor query needs a string")
        idx = bisect_left(self._words, text.lower())
        if idx == len(self._words):
            return None
        return self._words[idx]

    def contains(self, word: str) -> bool:
        if word is None:
            raise InvalidArgument("cannot look up None in the lexicon")
        word = word.lower()
        idx = bisect_left(self._words, word)
        return idx < len(self._words) and self._words[idx] == word

    def has_prefix(self, prefix: str) -> bool:
        """True if ``prefix`` is a member or starts some member.

        Members sharing a prefix are contiguous in sorted order and the prefix
        itself sorts before all of its extensions, so only the successor of
        ``prefix`` needs checking.
        """
        if prefix is None:
            raise InvalidArgument("cannot test None as a prefix")
        prefix = prefix.lower()
        nxt = self.successor(prefix)
        if nxt is None:
            return False
        return nxt.startswith(prefix)


def load_lexicon(path: str | Path) -> Lexicon:
    """Load a word list, one entry per line (extra columns on a line are ignored)."""
    if path is None:
        raise InvalidArgument("lexicon path is required")

    path = Path(path)
    words: list[str] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                tokens = line.split()
                if tokens:
                    words.append(tokens[0])
    except FileNotFoundError as e:
        raise ConfigurationError(f"Lexicon file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Lexicon file is not valid UTF-8: {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error loading word list: {path}: {e}") from e

    lexicon = Lexicon(words)
    if not len(lexicon):
        raise ConfigurationError(f"Lexicon file contains no words: {path}")

    logger.info("Loaded %d words from %s", len(lexicon), path)
    return lexicon
