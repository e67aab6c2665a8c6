from __future__ import annotations

import argparse
import logging
from typing import Callable, Iterable, List, Optional, Sequence

from letterstrands.errors import SourceOpenFailure
from letterstrands.trigrams import TrigramModel

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Visualize which letters tend to surround each letter of a text.",
    )
    parser.add_argument(
        "-w",
        "--word-file",
        dest="word_files",
        action="append",
        default=[],
        metavar="PATH",
        help="read trigram frequencies from this file (repeatable)",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def load_word_files(model: TrigramModel, paths: Iterable[str]) -> List[str]:
    """Ingest each path in order; returns the paths that failed to open."""
    failed: List[str] = []
    for path in paths:
        try:
            model.ingest_path(path)
        except SourceOpenFailure as e:
            logger.error("%s", e)
            failed.append(path)
    return failed


def main(argv: Optional[Sequence[str]] = None, run_gui: Optional[Callable[[TrigramModel], None]] = None) -> int:
    args = parse_args(argv)
    configure_logging()
    model = TrigramModel()
    load_word_files(model, args.word_files)
    if run_gui is not None:
        run_gui(model)
    return 0
