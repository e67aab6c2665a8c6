from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StrandsSettings:
    """Layout and control defaults shared by the renderer and the window."""

    letter_gap: int = 50
    arrow_gap: int = 3
    font_size: int = 30
    head_length: float = 7.0
    slider_default: float = 1.0
    slider_step: float = 1.0 / 1024
    window_title: str = "Strands Analysis"
    window_geometry: str = "900x700"
    dpi: int = 100
    top_n: int = 30

    @property
    def arrow_length(self) -> int:
        return self.letter_gap - self.font_size - self.arrow_gap * 2

    @property
    def arrow_offset(self) -> float:
        return self.font_size / 2 + self.arrow_gap


DEFAULT_SETTINGS = StrandsSettings()
