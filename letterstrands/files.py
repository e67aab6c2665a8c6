from __future__ import annotations

import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from letterstrands.errors import SourceOpenFailure

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileService:
    """File-related helpers kept apart from the GUI class."""

    @staticmethod
    @contextmanager
    def open_source(path: PathLike) -> Iterator[BinaryIO]:
        try:
            handle = open(path, "rb")
        except OSError as e:
            raise SourceOpenFailure(path, e.strerror or str(e)) from e
        try:
            yield handle
        finally:
            handle.close()

    @staticmethod
    def write_frequency_csv(path: PathLike, model) -> int:
        rows = model.most_common()
        with open(path, "w", encoding="utf-8-sig", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["trigram", "count", "frequency"])
            for trigram, count in rows:
                writer.writerow([trigram, count, f"{model.frequency_of(trigram):.6f}"])
        logger.info("Exported %d trigrams to %s", len(rows), path)
        return len(rows)
