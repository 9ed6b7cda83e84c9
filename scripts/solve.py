"""
Command-line front end for the Boggle search core.

Usage:
    python -m scripts.solve TILE [TILE ...] [--dictionary PATH] [--min-length N]

Examples:
    python -m scripts.solve E E C A A L E P H N B O Q T T Y --min-length 4
    python -m scripts.solve C A R E --locate care
    python -m scripts.solve C A R E --score care car care --image board.png

Tiles are given row-major; their count must be a perfect square. Multi-letter
tiles such as "Qu" are passed as a single argument.
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle.settings import settings
from boggle.board import Board
from boggle.engine import SearchEngine
from boggle.errors import BoggleError
from boggle.metrics import StageTimer
from boggle.render import board_to_text, encode_png, render_board_image


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Find words on a Boggle board")
    parser.add_argument("tiles", nargs="*",
                        help="Board tiles in row-major order (default: the classic 4x4 board)")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Minimum word length (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--locate", type=str, default=None,
                        help="Print the cell path spelling this word")
    parser.add_argument("--score", nargs="+", default=None, metavar="WORD",
                        help="Score these candidate words against the board")
    parser.add_argument("--image", type=str, default=None,
                        help="Write a PNG rendering of the board (located path highlighted)")
    args = parser.parse_args(argv)

    timer = StageTimer()
    try:
        with timer.stage("load_lexicon"):
            engine = SearchEngine(board=Board(args.tiles or None))
            engine.load_lexicon(args.dictionary)

        print(board_to_text(engine.board))

        with timer.stage("solve"):
            words = engine.find_all_words(args.min_length)
        timer.count("nodes", engine.last_nodes)

        print(f"\n--- {len(words)} words (min length {args.min_length}) ---")
        for word in sorted(words, key=lambda w: (-len(w), w)):
            print(f"  {word}")

        path = []
        if args.locate:
            with timer.stage("locate"):
                path = engine.locate_word(args.locate)
            if path:
                print(f"\n{args.locate}: cells {path}")
            else:
                print(f"\n{args.locate}: not on board")

        if args.score:
            with timer.stage("score"):
                points = engine.score(args.score, args.min_length)
            print(f"\nScore: {points}")

        if args.image:
            img = render_board_image(engine.board, settings.BOARD_IMAGE_CELL_SIZE, path)
            Path(args.image).write_bytes(encode_png(img))
            print(f"\nBoard image saved to: {args.image}")

    except BoggleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nTimings: {timer.summary()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
