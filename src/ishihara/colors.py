"""
Color generators for placed discs.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .config import Color, ColorMode, PackingConfig, Palette, Vec3


def random_color(rng: np.random.Generator, cmin: float, cmax: float) -> Color:
    """Random rgb triple whose channels lie in [cmin, cmax]."""
    r, g, b = (float(v) for v in rng.uniform(cmin, cmax, size=3))
    return r, g, b


def cosine_gradient_color(a: Vec3, b: Vec3, c: Vec3, d: Vec3, t: float) -> Color:
    """
    Cosine gradient palette color(t) = a + b * cos(2pi * (c * t + d)),
    scaled to [0, 255] and clamped per channel.

    See http://www.iquilezles.org/www/articles/palettes/palettes.htm
    """
    a, b, c, d = (np.asarray(v, dtype=float) for v in (a, b, c, d))
    channels = np.clip(255.0 * (a + b * np.cos(2.0 * np.pi * (c * t + d))), 0.0, 255.0)
    r, g, b = (float(v) for v in channels)
    return r, g, b


@dataclass(frozen=True)
class ColorAssigner:
    """Picks one color per disc with the generator selected for the run."""
    mode: ColorMode
    rmax: float
    palette: Optional[Palette] = None
    cmin: float = 0.0
    cmax: float = 255.0

    @classmethod
    def from_config(cls, config: PackingConfig, rng: np.random.Generator) -> "ColorAssigner":
        """Fix the generator for a run, drawing a palette if COSINE mode needs one."""
        palette = config.palette
        if config.color_mode is ColorMode.COSINE and palette is None:
            palette = Palette.random(rng)
        return cls(config.color_mode, config.rmax, palette, config.cmin, config.cmax)

    def choose(self, radius: float, rng: np.random.Generator) -> Color:
        if self.mode is ColorMode.RANDOM:
            return random_color(rng, self.cmin, self.cmax)
        p = self.palette
        return cosine_gradient_color(p.a, p.b, p.c, p.d, 1.5 * radius / self.rmax)
