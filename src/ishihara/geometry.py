"""
Geometry utilities for disc packing.

Contains:
- Rect: axis-aligned query rectangles
- Entry: the immutable record stored for every placed disc
- SpatialIndex: grid-based spatial indexing for range queries
"""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .config import Color, GridKey

# Slack allowed when comparing center distances against required spacing
COLLISION_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Rect:
    """Closed axis-aligned rectangle [xmin, xmax] x [ymin, ymax]."""
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @classmethod
    def around(cls, x: float, y: float, pad: float) -> "Rect":
        """Square of half-width pad centred on (x, y)."""
        return cls(x - pad, x + pad, y - pad, y + pad)

    @classmethod
    def everything(cls) -> "Rect":
        return cls(-math.inf, math.inf, -math.inf, math.inf)

    def contains(self, x: float, y: float) -> bool:
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax


@dataclass(frozen=True)
class Entry:
    """A placed disc as recorded in the spatial index."""
    x: float
    y: float
    r: float
    color: Color
    orientation: Optional[Tuple[float, float]] = None


def sq_dist(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared distance from (x1, y1) to (x2, y2)."""
    dx = x1 - x2
    dy = y1 - y2
    return dx * dx + dy * dy


def offscreen(x: float, y: float, r: float, width: float, height: float) -> bool:
    """True if a disc is not entirely inside the [0, width] x [0, height] canvas."""
    return x - r < 0 or x + r > width or y - r < 0 or y + r > height


def collides(x: float, y: float, r: float, centers: np.ndarray, radii: np.ndarray, epsilon: float) -> bool:
    """Check a disc against many obstacles at once (vectorized)."""
    if len(radii) == 0:
        return False
    reach = radii + (r + epsilon - COLLISION_TOLERANCE)
    d_sq = np.sum((centers - (x, y)) ** 2, axis=1)
    return bool(np.any(d_sq < reach * reach))


@dataclass
class SpatialIndex:
    """Append-only grid index over placed disc centers."""
    cell_size: float
    origin: Tuple[float, float] = (0.0, 0.0)
    grid: Dict[GridKey, List[Entry]] = field(default_factory=dict)
    max_radius: float = 0.0

    _entries: List[Entry] = field(default_factory=list)

    def insert(self, entry: Entry) -> Entry:
        """Add a placed disc to the index."""
        self._entries.append(entry)
        self.grid.setdefault(self._get_cell_key(entry.x, entry.y), []).append(entry)
        self.max_radius = max(self.max_radius, entry.r)
        return entry

    def range_query(self, rect: Rect) -> Iterator[Entry]:
        """Yield entries whose centers lie inside rect (bounds inclusive)."""
        if not self._entries:
            return

        if self._cell_count(rect) > len(self.grid):
            # Wide queries: scanning occupied space is cheaper than walking empty cells
            for entry in self._entries:
                if rect.contains(entry.x, entry.y):
                    yield entry
            return

        min_key = self._get_cell_key(rect.xmin, rect.ymin)
        max_key = self._get_cell_key(rect.xmax, rect.ymax)
        for gx in range(min_key[0], max_key[0] + 1):
            for gy in range(min_key[1], max_key[1] + 1):
                for entry in self.grid.get((gx, gy), ()):
                    if rect.contains(entry.x, entry.y):
                        yield entry

    def entries(self, start: int = 0) -> List[Entry]:
        """Entries in insertion order, from the start-th onward."""
        return self._entries[start:]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _cell_count(self, rect: Rect) -> float:
        span_x = (rect.xmax - rect.xmin) / self.cell_size + 1
        span_y = (rect.ymax - rect.ymin) / self.cell_size + 1
        if not (math.isfinite(span_x) and math.isfinite(span_y)):
            return math.inf
        return span_x * span_y

    def _get_cell_key(self, x: float, y: float) -> GridKey:
        """Convert a point to its grid cell coordinates."""
        return (int((x - self.origin[0]) // self.cell_size),
                int((y - self.origin[1]) // self.cell_size))
