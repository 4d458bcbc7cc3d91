import logging
import time
import numpy as np
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .colors import ColorAssigner
from .config import PackingConfig, PackingProgress, seed_to_uint
from .field import NoiseField
from .geometry import Entry, Rect, SpatialIndex, collides, offscreen
from .sizes import make_sizes

logger = logging.getLogger(__name__)

# Seconds between progress messages while draining with run()
PROGRESS_INTERVAL = 1.0


class EngineState(Enum):
    """Lifecycle of a packing run."""
    BUILDING = "building"
    DONE = "done"


@dataclass(frozen=True)
class Disc:
    """A placed disc that may still spawn neighbours."""
    handle: int
    x: float
    y: float
    r: float
    sizes: Tuple[float, ...]


class Frontier:
    """Live discs keyed by handle, supporting O(1) uniform pick and removal."""

    def __init__(self):
        self._discs: Dict[int, Disc] = {}
        self._handles: List[int] = []
        self._slots: Dict[int, int] = {}

    def add(self, disc: Disc) -> None:
        self._slots[disc.handle] = len(self._handles)
        self._handles.append(disc.handle)
        self._discs[disc.handle] = disc

    def pick(self, rng: np.random.Generator) -> Disc:
        return self._discs[self._handles[int(rng.integers(len(self._handles)))]]

    def shrink(self, handle: int, sizes: Tuple[float, ...]) -> Disc:
        """Replace a disc's candidate radii, keeping its handle and slot."""
        disc = replace(self._discs[handle], sizes=sizes)
        self._discs[handle] = disc
        return disc

    def remove(self, handle: int) -> None:
        # Swap the last handle into the vacated slot
        slot = self._slots.pop(handle)
        last = self._handles.pop()
        if last != handle:
            self._handles[slot] = last
            self._slots[last] = slot
        del self._discs[handle]

    def get(self, handle: int) -> Optional[Disc]:
        return self._discs.get(handle)

    def __contains__(self, handle: int) -> bool:
        return handle in self._discs

    def __len__(self) -> int:
        return len(self._handles)


class PackingEngine:
    """Grows a non-overlapping disc packing outward from a random seed disc."""

    def __init__(self, config: Optional[PackingConfig] = None):
        self.config = config or PackingConfig()
        self.rng = np.random.default_rng(seed_to_uint(self.config.seed))
        self.field = NoiseField.from_config(self.config)
        self.colors = ColorAssigner.from_config(self.config, self.rng)
        self.index = SpatialIndex(cell_size=self.config.grid_cell_size)
        self.frontier = Frontier()
        self.state = EngineState.BUILDING
        self.progress = PackingProgress()
        self._next_handle = 0

        self._place_seed_disc()

    @property
    def done(self) -> bool:
        """
        True once advance() has found the frontier empty.

        The step that retires the last frontier disc leaves the engine BUILDING;
        the following advance() call makes the transition.
        """
        return self.state is EngineState.DONE

    @property
    def frontier_size(self) -> int:
        return len(self.frontier)

    def _place_seed_disc(self) -> None:
        w, h = self.config.width, self.config.height
        x = float(self.rng.uniform(0, w))
        y = float(self.rng.uniform(0, h))
        sizes = make_sizes(self.config, self.field.sample(x, y))
        r = sizes[int(self.rng.integers(len(sizes)))]

        # Keep the first disc on the canvas
        r = min(r, w / 2.0, h / 2.0)
        x = min(max(x, r), w - r)
        y = min(max(y, r), h - r)
        self._place_disc(x, y, r)

    def _place_disc(self, x: float, y: float, r: float) -> Entry:
        color = self.colors.choose(r, self.rng)
        sizes = make_sizes(self.config, self.field.sample(x, y))
        entry = self.index.insert(Entry(x, y, r, color, self.field.gradient(x, y)))
        self.frontier.add(Disc(self._next_handle, x, y, r, sizes))
        self._next_handle += 1

        self.progress.discs_placed += 1
        self.progress.frontier_size = len(self.frontier)
        if self.config.verbose and self.progress.discs_placed % 25 == 0:
            logger.info(self.progress)
        return entry

    def _try_around(self, selected: Disc, radius: float) -> Optional[Entry]:
        """Attempt up to max_tries tangent placements of a disc around selected."""
        cfg = self.config
        dist = radius + selected.r + cfg.epsilon
        # Any obstacle touching the candidate is within dist + its own reach of selected
        pad = self.index.max_radius + 2 * radius + selected.r + 2 * cfg.epsilon
        existing = list(self.index.range_query(Rect.around(selected.x, selected.y, pad)))
        centers = np.array([(e.x, e.y) for e in existing], dtype=float).reshape(-1, 2)
        radii = np.array([e.r for e in existing], dtype=float)

        for _ in range(cfg.max_tries):
            theta = self.rng.uniform(0.0, 2.0 * np.pi)
            x = selected.x + dist * float(np.cos(theta))
            y = selected.y + dist * float(np.sin(theta))
            if offscreen(x, y, radius, cfg.width, cfg.height):
                continue
            if collides(x, y, radius, centers, radii, cfg.epsilon):
                continue
            return self._place_disc(x, y, radius)
        return None

    def advance(self) -> EngineState:
        """
        Perform one placement attempt.

        Picks a frontier disc and one of its candidate radii, then tries random
        tangent positions around it. When every try fails the disc keeps only
        the radii smaller than the one tried, and leaves the frontier once none
        remain. Returns the engine state after the step.
        """
        if self.state is EngineState.DONE:
            return self.state
        if len(self.frontier) == 0:
            self.state = EngineState.DONE
            if self.config.verbose:
                logger.info("Done! %s", self.progress)
            return self.state

        self.progress.steps += 1
        selected = self.frontier.pick(self.rng)
        radius = selected.sizes[int(self.rng.integers(len(selected.sizes)))]

        if self._try_around(selected, radius) is not None:
            return self.state

        self.progress.exhausted += 1
        smaller = tuple(r for r in selected.sizes if r < radius)
        if smaller:
            self.frontier.shrink(selected.handle, smaller)
        else:
            self.frontier.remove(selected.handle)
        self.progress.frontier_size = len(self.frontier)
        return self.state

    def run(self, max_steps: Optional[int] = None) -> EngineState:
        """
        Drain advance() until Done, or until max_steps calls have been made.

        Returns:
            The engine state when the loop stops.
        """
        steps = 0
        last_report = time.monotonic()
        while not self.done and (max_steps is None or steps < max_steps):
            self.advance()
            steps += 1
            if self.config.verbose and time.monotonic() - last_report >= PROGRESS_INTERVAL:
                logger.info(self.progress)
                last_report = time.monotonic()
        return self.state

    def generate(self) -> Iterator[Entry]:
        """
        Advance until Done, yielding each disc as it is placed.

        Yields:
            Entries in placement order, including discs placed before the call.
        """
        emitted = 0
        while True:
            placed = self.index.entries(emitted)
            emitted += len(placed)
            yield from placed
            if self.done:
                return
            self.advance()

    def snapshot(self) -> List[Entry]:
        """All placed discs, in insertion order."""
        return list(self.index.range_query(Rect.everything()))

    def pack(self) -> List[Entry]:
        """Run to completion and return every placed disc."""
        self.run()
        return self.snapshot()
