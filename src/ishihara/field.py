"""
Seeded Perlin noise field used to vary disc size across the canvas.
"""

import numpy as np
from typing import Optional, Tuple
from noise import pnoise2

from .config import PackingConfig, seed_to_uint

# Range used when a scale is derived from the seed
DERIVED_SCALE_RANGE = (0.002, 0.01)
# pnoise2 repeats its lattice every NOISE_REPEAT units by default
NOISE_REPEAT = 1024
# Perlin output lies roughly in [-sqrt(1/2), sqrt(1/2)]
PERLIN_SPAN = np.sqrt(0.5)


class NoiseField:
    """Deterministic scalar field over canvas coordinates with values in [0, 1]."""

    def __init__(
        self,
        seed: int,
        scale_x: Optional[float] = None,
        scale_y: Optional[float] = None,
        octaves: int = 4,
        persistence: float = 0.5,
        step: float = 1.0,
    ):
        rng = np.random.default_rng(seed_to_uint(seed))
        self.scale_x = float(scale_x) if scale_x is not None else float(rng.uniform(*DERIVED_SCALE_RANGE))
        self.scale_y = float(scale_y) if scale_y is not None else float(rng.uniform(*DERIVED_SCALE_RANGE))
        self.offset_x, self.offset_y = (float(v) for v in rng.uniform(0, NOISE_REPEAT, size=2))
        self.base = int(rng.integers(0, 256))
        self.octaves = octaves
        self.persistence = persistence
        self.step = step

    @classmethod
    def from_config(cls, config: PackingConfig) -> "NoiseField":
        return cls(
            config.seed,
            scale_x=config.noise_scale_x,
            scale_y=config.noise_scale_y,
            octaves=config.noise_octaves,
            persistence=config.noise_persistence,
        )

    def sample(self, x: float, y: float) -> float:
        raw = pnoise2(
            float(x) * self.scale_x + self.offset_x,
            float(y) * self.scale_y + self.offset_y,
            octaves=self.octaves,
            persistence=self.persistence,
            base=self.base,
        )
        return float(np.clip(0.5 + raw * PERLIN_SPAN, 0.0, 1.0))

    def gradient(self, x: float, y: float) -> Tuple[float, float]:
        """Forward-difference estimate of the field's slope at (x, y)."""
        here = self.sample(x, y)
        dx = (self.sample(x + self.step, y) - here) / self.step
        dy = (self.sample(x, y + self.step) - here) / self.step
        return dx, dy
