from __future__ import annotations

import logging
from collections import Counter
from typing import BinaryIO, List, Sequence, Tuple, Union

from letterstrands.files import FileService, PathLike
from letterstrands.letters import LetterStream, SlidingWindow, is_letter

logger = logging.getLogger(__name__)

Trigram = Union[str, Sequence[str]]


def trigram_key(trigram: Trigram) -> str:
    return trigram if isinstance(trigram, str) else "".join(trigram)


class TrigramModel:
    """Letter trigram counts accumulated from corpus sources.

    ``total`` and ``max`` are recomputed over the whole table after every
    ingestion and clear.
    """

    def __init__(self):
        self.counts: Counter = Counter()
        self.total = 0
        self.max = 0

    def ingest(self, source: BinaryIO) -> int:
        """Count every all-letter window of the source; returns trigrams added."""
        window = SlidingWindow(3)
        added = 0
        try:
            for char in LetterStream(source):
                window.push(char)
                if all(is_letter(c) for c in window):
                    self.counts["".join(window)] += 1
                    added += 1
        finally:
            self._recompute()
        return added

    def ingest_path(self, path: PathLike) -> int:
        with FileService.open_source(path) as source:
            added = self.ingest(source)
        logger.info(
            "Loaded %s: %d trigrams added (%d distinct, total %d)",
            path, added, len(self.counts), self.total,
        )
        return added

    def clear(self) -> None:
        self.counts.clear()
        self._recompute()
        logger.info("Trigram counts cleared")

    def _recompute(self) -> None:
        self.total = sum(self.counts.values())
        self.max = max(self.counts.values(), default=0)

    def count(self, trigram: Trigram) -> int:
        return self.counts.get(trigram_key(trigram), 0)

    def frequency_of(self, trigram: Trigram) -> float:
        if self.total == 0:
            return 0.0
        return self.count(trigram) / self.total

    @property
    def max_frequency(self) -> float:
        if self.total == 0:
            return 0.0
        return self.max / self.total

    def threshold(self, value: float) -> float:
        """Minimum frequency for an arrow at slider ``value`` (1 is most permissive)."""
        value = min(max(value, 0.0), 1.0)
        return self.max_frequency * (1 - value)

    def most_common(self, n: int | None = None) -> List[Tuple[str, int]]:
        return self.counts.most_common(n)

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, trigram) -> bool:
        return trigram_key(trigram) in self.counts
