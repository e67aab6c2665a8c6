from __future__ import annotations

import codecs
from collections import deque
from typing import BinaryIO, Generic, Iterator, List, Optional, Sequence, TypeVar

ABSENT = None
MAX_SEQUENCE_BYTES = 6
LINE_BREAKS = ("\r", "\n")

T = TypeVar("T")


def to_upper(char: str) -> str:
    """Uppercase a single character, keeping it when the mapping expands (e.g. ß)."""
    upper = char.upper()
    return upper if len(upper) == 1 else char


def is_letter(char: Optional[str]) -> bool:
    return char is not ABSENT and char.isalpha()


class LetterStream:
    """Decode a binary stream into uppercased characters, one byte at a time.

    The stream ends (``read_letter`` returns ``ABSENT``) at end of input, on a
    malformed byte sequence, or when ``MAX_SEQUENCE_BYTES`` bytes did not make
    up a complete character. The source is left open for its owner to close.
    """

    def __init__(self, source: BinaryIO):
        self.source = source
        self.finished = False

    def read_letter(self) -> Optional[str]:
        if self.finished:
            return ABSENT
        decoder = codecs.getincrementaldecoder("utf-8")()
        for _ in range(MAX_SEQUENCE_BYTES):
            byte = self.source.read(1)
            if not byte:
                break
            try:
                decoded = decoder.decode(byte)
            except UnicodeDecodeError:
                break
            if decoded:
                return to_upper(decoded)
        self.finished = True
        return ABSENT

    def __iter__(self) -> Iterator[str]:
        while True:
            char = self.read_letter()
            if char is ABSENT:
                return
            yield char


class LineCursor:
    """Alphabetic-only cursor confined to one line of a text buffer."""

    def __init__(self, buffer: Sequence[str], line: int):
        self.text = buffer[line]
        self.line = line
        self.offset = 0

    @property
    def at_line_end(self) -> bool:
        return self.offset >= len(self.text) or self.text[self.offset] in LINE_BREAKS

    def next_letter(self) -> Optional[str]:
        while not self.at_line_end:
            char = self.text[self.offset]
            self.offset += 1
            if char.isalpha():
                return to_upper(char)
        return ABSENT

    def __iter__(self) -> Iterator[str]:
        while True:
            letter = self.next_letter()
            if letter is ABSENT:
                return
            yield letter


class SlidingWindow(Generic[T]):
    """The ``size`` most recently pushed items, oldest first."""

    def __init__(self, size: int = 3, fill: Optional[T] = ABSENT):
        self.items = deque([fill] * size, maxlen=size)

    def push(self, item: T) -> None:
        self.items.append(item)

    @property
    def newest(self) -> Optional[T]:
        return self.items[-1]

    def __getitem__(self, index: int) -> Optional[T]:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def to_list(self) -> List[Optional[T]]:
        return list(self.items)
