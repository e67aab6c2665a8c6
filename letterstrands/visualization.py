from __future__ import annotations

from typing import List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection

from letterstrands.arrows import Direction, DrawIntent
from letterstrands.settings import DEFAULT_SETTINGS, StrandsSettings
from letterstrands.trigrams import TrigramModel

LINE_WIDTH_PX = 2.0


def px_to_pt(px: float, dpi: int) -> float:
    return px * 72.0 / dpi


def arrow_segments(
    center: Tuple[float, float],
    direction: Direction,
    settings: StrandsSettings = DEFAULT_SETTINGS,
) -> List[np.ndarray]:
    """Shaft and two head strokes of the arrow leaving a glyph, in pixel coordinates."""
    step = np.array([direction.dx, direction.dy], dtype=float)
    start = np.asarray(center, dtype=float) + step * settings.arrow_offset
    vector = step * settings.arrow_length
    tip = start + vector
    xnorm, ynorm = vector / np.hypot(*vector)
    scale = np.sqrt(0.5) * settings.head_length
    segments = [np.array([start, tip])]
    for sign in (-1, 1):
        head = tip + scale * np.array([-(xnorm + sign * ynorm), sign * xnorm - ynorm])
        segments.append(np.array([tip, head]))
    return segments


def canvas_extent(intents: Sequence[DrawIntent], settings: StrandsSettings = DEFAULT_SETTINGS) -> Tuple[int, int]:
    max_column = max((i.column for i in intents), default=-1)
    max_line = max((i.line for i in intents), default=-1)
    return ((max_column + 2) * settings.letter_gap, (max_line + 2) * settings.letter_gap)


class VisualizationService:
    """Generate matplotlib figures without GUI coupling."""

    def __init__(self, settings: StrandsSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def build_strands_figure(self, width: int, height: int):
        dpi = self.settings.dpi
        fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor="white")
        fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
        ax.axis("off")
        return fig, ax

    def draw_strands(self, ax, intents: Sequence[DrawIntent]) -> Tuple[int, int]:
        """Redraw every glyph and arrow on ``ax``; returns the pixel extent used."""
        settings = self.settings
        ax.clear()
        ax.axis("off")
        width, height = canvas_extent(intents, settings)
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)

        color = plt.rcParams["text.color"]
        font_size = px_to_pt(settings.font_size, settings.dpi)
        segments: List[np.ndarray] = []
        for intent in intents:
            x, y = intent.position
            ax.text(x, y, intent.letter, ha="center", va="center", fontsize=font_size, color=color)
            for direction in sorted(intent.directions, key=lambda d: d.value):
                segments.extend(arrow_segments(intent.position, direction, settings))

        if segments:
            ax.add_collection(
                LineCollection(
                    segments,
                    colors=color,
                    linewidths=px_to_pt(LINE_WIDTH_PX, settings.dpi),
                    capstyle="round",
                )
            )
        return width, height

    def build_frequency_figure(self, model: TrigramModel, top_n: int | None = None):
        top_n = top_n or self.settings.top_n
        top = model.most_common(top_n)
        if not top:
            return None
        fig, ax = plt.subplots(figsize=(12, 8))
        trigrams = [t for t, _ in top]
        frequencies = [model.frequency_of(t) for t in trigrams]

        ax.barh(trigrams, frequencies, color="steelblue")
        ax.set_xlabel("Frequency", fontsize=12)
        ax.set_title(f"Most common trigrams (top {len(top)} of {len(model)})", fontsize=16, pad=20)
        ax.invert_yaxis()
        plt.tight_layout()
        return fig
