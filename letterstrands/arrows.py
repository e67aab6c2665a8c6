from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, Tuple

from letterstrands.grid import Neighborhood, scan_buffer
from letterstrands.letters import ABSENT
from letterstrands.settings import DEFAULT_SETTINGS, StrandsSettings
from letterstrands.trigrams import TrigramModel

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Compass directions as (row_offset, column_offset), rows growing downward."""

    NORTH_WEST = (-1, -1)
    NORTH = (-1, 0)
    NORTH_EAST = (-1, 1)
    WEST = (0, -1)
    EAST = (0, 1)
    SOUTH_WEST = (1, -1)
    SOUTH = (1, 0)
    SOUTH_EAST = (1, 1)

    @property
    def dy(self) -> int:
        return self.value[0]

    @property
    def dx(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class ArrowDecision:
    letter: Optional[str]
    directions: FrozenSet[Direction]


@dataclass(frozen=True)
class DrawIntent:
    letter: str
    directions: FrozenSet[Direction]
    line: int
    column: int
    position: Tuple[float, float]


class ArrowRule:
    """Decide which neighbors of a letter get an arrow.

    An arrow points toward direction D when some other present neighbor D'
    forms a trigram ``D' + center + D`` whose frequency exceeds the threshold.
    """

    def __init__(self, model: TrigramModel):
        self.model = model

    def best_frequency(self, neighborhood: Neighborhood, target: Direction) -> float:
        center = neighborhood.center
        end = neighborhood.at(target.dy, target.dx)
        best = 0.0
        if center is ABSENT or end is ABSENT:
            return best
        for other in Direction:
            if other is target:
                continue
            start = neighborhood.at(other.dy, other.dx)
            if start is ABSENT:
                continue
            best = max(best, self.model.frequency_of((start, center, end)))
        return best

    def decide(self, neighborhood: Neighborhood, threshold: float) -> ArrowDecision:
        directions = set()
        if neighborhood.center is not ABSENT:
            for direction in Direction:
                if neighborhood.at(direction.dy, direction.dx) is ABSENT:
                    continue
                if self.best_frequency(neighborhood, direction) > threshold:
                    directions.add(direction)
        return ArrowDecision(letter=neighborhood.center, directions=frozenset(directions))


def glyph_position(line: int, column: int, settings: StrandsSettings = DEFAULT_SETTINGS) -> Tuple[float, float]:
    return ((column + 1) * settings.letter_gap, (line + 1) * settings.letter_gap)


def collect_intents(
    buffer: Sequence[str],
    model: TrigramModel,
    value: float,
    settings: StrandsSettings = DEFAULT_SETTINGS,
) -> List[DrawIntent]:
    """Rescan the whole buffer and return what to draw at slider ``value``."""
    rule = ArrowRule(model)
    threshold = model.threshold(value)
    intents: List[DrawIntent] = []
    for neighborhood in scan_buffer(buffer):
        decision = rule.decide(neighborhood, threshold)
        intents.append(
            DrawIntent(
                letter=decision.letter,
                directions=decision.directions,
                line=neighborhood.line,
                column=neighborhood.column,
                position=glyph_position(neighborhood.line, neighborhood.column, settings),
            )
        )
    logger.debug("Collected %d glyphs over %d lines (threshold %.6f)", len(intents), len(buffer), threshold)
    return intents
