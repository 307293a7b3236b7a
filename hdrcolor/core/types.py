"""Shared types for hdrcolor: Report, Settings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hdrcolor.core.color import Color

DEFAULT_SWATCH_SIZE = 64


def _channel(v: float) -> float | None:
    """NaN and infinities have no JSON form; they are recorded as None."""
    return v if math.isfinite(v) else None


@dataclass
class Settings:
    """Runtime configuration, from the environment and .env files."""

    palette_path: Path | None = None
    swatch_size: int = DEFAULT_SWATCH_SIZE


@dataclass
class Report:
    """Accumulates colours for text/JSON output."""

    title: str = ''
    entries: list[dict[str, Any]] = field(default_factory=list)

    def add(self, label: str, color: Color) -> None:
        """Record a colour with its display conversion."""
        r, g, b, a = color.rgba()
        self.entries.append(
            {
                'label': label,
                'r': _channel(color.r),
                'g': _channel(color.g),
                'b': _channel(color.b),
                'hex': color.to_hex(),
                'display': [r, g, b, a],
                'clamped': not color.in_gamut(),
            }
        )

    @property
    def clamped_count(self) -> int:
        return sum(1 for e in self.entries if e['clamped'])
