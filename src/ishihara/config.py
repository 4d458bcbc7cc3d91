"""
Configuration and type definitions for disc packing.
"""

import numbers
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple, Union
from enum import Enum

# Type aliases
GridKey = Tuple[int, int]
Color = Tuple[float, float, float]
Vec3 = Tuple[float, float, float]

SEED_MODULUS = 2 ** 64


class ConfigError(ValueError):
    """Raised when a PackingConfig cannot describe a valid packing run."""


class ColorMode(Enum):
    """Available color generators."""
    RANDOM = "random"
    COSINE = "cosine"


@dataclass(frozen=True)
class Palette:
    """Coefficients of a cosine gradient palette, one 3-vector each."""
    a: Vec3
    b: Vec3
    c: Vec3
    d: Vec3

    def __post_init__(self):
        for name in ("a", "b", "c", "d"):
            vec = tuple(float(v) for v in getattr(self, name))
            if len(vec) != 3:
                raise ConfigError(f"palette vector {name} must have 3 components, got {len(vec)}")
            object.__setattr__(self, name, vec)

    @classmethod
    def random(cls, rng: np.random.Generator) -> "Palette":
        """Draw a palette centred on mid-grey with gaussian jitter."""
        a = 0.5 + rng.standard_normal(3) / 5.0
        b = 0.5 + rng.standard_normal(3) / 2.0
        c = 0.5 + rng.standard_normal(3) / 6.0
        d = rng.standard_normal(3) / 6.0
        return cls(tuple(a), tuple(b), tuple(c), tuple(d))


def _require_real(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigError(f"{name} must be a real number, got {value!r}")


def seed_to_uint(seed: int) -> int:
    """Map any integer seed (including negative 64-bit values) onto numpy's range."""
    return int(seed) % SEED_MODULUS


@dataclass(frozen=True)
class PackingConfig:
    """
    Configuration parameters for the disc packing engine.

    Canvas:
        width, height: Size of the rectangle every disc must fit inside

    Radii:
        rmin, rmax: Global radius bounds (equal bounds give fixed-radius packing)
        rincr: Step between neighbouring candidate radii
        rvar: Lower bound of a location's radii as a fraction of its upper bound
        epsilon: Minimum gap between neighbouring discs

    Search:
        max_tries: Angles tried per advance() before shrinking the frontier disc
        cell_size: Spatial index granularity (None = 2 * rmax)

    Noise:
        noise_scale_x, noise_scale_y: Field frequency per axis (None = derive from seed)
        noise_octaves, noise_persistence: Perlin fBm parameters

    Color:
        color_mode: RANDOM channels in [cmin, cmax] or COSINE palette gradient
        palette: Cosine coefficients (None = draw from the seeded generator)
        cmin, cmax: Channel bounds for RANDOM mode

    Output:
        verbose: Log progress messages at INFO level
    """
    # Canvas
    width: int = 500
    height: int = 500

    # Radii
    rmin: float = 2.0
    rmax: float = 125.0
    rincr: float = 1.0
    rvar: float = 0.3
    epsilon: float = 1.0

    # Search
    max_tries: int = 1000
    cell_size: Optional[float] = None

    # Noise
    noise_scale_x: Optional[float] = 0.005
    noise_scale_y: Optional[float] = 0.005
    noise_octaves: int = 4
    noise_persistence: float = 0.5

    # Randomness
    seed: int = 0

    # Color
    color_mode: Union[ColorMode, str] = ColorMode.COSINE
    palette: Optional[Palette] = None
    cmin: float = 0.0
    cmax: float = 255.0

    # Output
    verbose: bool = False

    def __post_init__(self):
        try:
            object.__setattr__(self, "color_mode", ColorMode(self.color_mode))
        except ValueError:
            raise ConfigError(f"unknown color mode: {self.color_mode!r}") from None
        self._validate()

    def _validate(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        for name in ("rmin", "rmax", "rincr", "rvar", "epsilon", "noise_persistence", "cmin", "cmax"):
            _require_real(name, getattr(self, name))
        for name in ("cell_size", "noise_scale_x", "noise_scale_y"):
            if getattr(self, name) is not None:
                _require_real(name, getattr(self, name))
        if self.rmin <= 0:
            raise ConfigError(f"rmin must be positive, got {self.rmin}")
        if self.rmin > self.rmax:
            raise ConfigError(f"rmin ({self.rmin}) must not exceed rmax ({self.rmax})")
        if 2 * self.rmin > min(self.width, self.height):
            raise ConfigError(
                f"a disc of radius rmin={self.rmin} does not fit a {self.width}x{self.height} canvas")
        if self.rincr <= 0:
            raise ConfigError(f"rincr must be positive, got {self.rincr}")
        if self.rvar <= 0:
            raise ConfigError(f"rvar must be positive, got {self.rvar}")
        if self.epsilon < 0:
            raise ConfigError(f"epsilon must be non-negative, got {self.epsilon}")
        if isinstance(self.max_tries, bool) or not isinstance(self.max_tries, (int, np.integer)) \
                or self.max_tries <= 0:
            raise ConfigError(f"max_tries must be a positive integer, got {self.max_tries!r}")
        if self.cell_size is not None and self.cell_size <= 0:
            raise ConfigError(f"cell_size must be positive, got {self.cell_size}")
        for name in ("noise_scale_x", "noise_scale_y"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ConfigError(f"{name} must be positive or None, got {value}")
        if isinstance(self.noise_octaves, bool) or not isinstance(self.noise_octaves, (int, np.integer)) \
                or self.noise_octaves < 1:
            raise ConfigError(f"noise_octaves must be at least 1, got {self.noise_octaves}")
        if not 0.0 <= self.cmin <= self.cmax <= 255.0:
            raise ConfigError(f"color range must satisfy 0 <= cmin <= cmax <= 255, got [{self.cmin}, {self.cmax}]")
        if self.palette is not None and not isinstance(self.palette, Palette):
            raise ConfigError("palette must be a Palette instance or None")

    @property
    def grid_cell_size(self) -> float:
        return self.cell_size if self.cell_size is not None else 2.0 * self.rmax


@dataclass
class PackingProgress:
    """Tracks the current state of the packing engine."""
    discs_placed: int = 0
    steps: int = 0
    exhausted: int = 0
    frontier_size: int = 0

    @property
    def exhaustion_ratio(self) -> float:
        """Share of advance() calls that used up every try."""
        return self.exhausted / self.steps if self.steps > 0 else 0

    def __str__(self) -> str:
        return (f"Placed: {self.discs_placed} | Frontier: {self.frontier_size} | "
                f"Steps: {self.steps} | Exhausted: {self.exhausted} ({self.exhaustion_ratio:.0%})")
