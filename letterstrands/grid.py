from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from letterstrands.letters import ABSENT, LineCursor, SlidingWindow

ABOVE, CENTER, BELOW = 0, 1, 2
PREVIOUS, CURRENT, NEXT = 0, 1, 2

Row = Tuple[Optional[str], Optional[str], Optional[str]]


@dataclass(frozen=True)
class Neighborhood:
    cells: Tuple[Row, Row, Row]
    line: int
    column: int

    def at(self, row_offset: int, column_offset: int) -> Optional[str]:
        return self.cells[row_offset + 1][column_offset + 1]

    @property
    def center(self) -> Optional[str]:
        return self.cells[CENTER][CURRENT]

    @property
    def lookahead(self) -> Optional[str]:
        return self.cells[CENTER][NEXT]


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def scan_line(buffer: Sequence[str], line: int) -> Iterator[Neighborhood]:
    """Yield one neighborhood per letter of ``buffer[line]``.

    The lines above and below advance one letter per column alongside the
    center line; rows outside the buffer stay absent.
    """
    cursors: List[Optional[LineCursor]] = []
    for index in (line - 1, line, line + 1):
        cursors.append(LineCursor(buffer, index) if 0 <= index < len(buffer) else None)
    windows = [SlidingWindow(3) for _ in cursors]

    for cursor, window in zip(cursors, windows):
        if cursor is not None:
            window.push(cursor.next_letter())

    column = 0
    while windows[CENTER].newest is not ABSENT:
        for cursor, window in zip(cursors, windows):
            if cursor is not None:
                window.push(cursor.next_letter())
        cells = tuple(tuple(window) for window in windows)
        yield Neighborhood(cells=cells, line=line, column=column)
        column += 1


def scan_buffer(buffer: Sequence[str]) -> Iterator[Neighborhood]:
    for line in range(len(buffer)):
        yield from scan_line(buffer, line)
