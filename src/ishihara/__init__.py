"""
ishihara - Organic variable-radius disc packing for generative art.

Usage:
    from ishihara import PackingEngine, PackingConfig

    # Run to completion
    engine = PackingEngine(PackingConfig(width=800, height=600, seed=42))
    discs = engine.pack()

    # Incremental, one placement per frame
    engine = PackingEngine(PackingConfig(rmin=3, rmax=40, seed=7))
    while not engine.done:
        engine.advance()
        draw(engine.snapshot())

    # Fixed radius, random colors
    config = PackingConfig(rmin=5, rmax=5, rvar=1, color_mode="random")
    discs = PackingEngine(config).pack()

Each placed disc is an Entry with x, y, r, an rgb color and the noise
gradient at its centre as an orientation vector.
"""

from .config import ColorMode, ConfigError, PackingConfig, PackingProgress, Palette
from .colors import ColorAssigner
from .field import NoiseField
from .geometry import Entry, Rect, SpatialIndex
from .packer import Disc, EngineState, PackingEngine
from .sizes import make_sizes

__all__ = [
    "PackingEngine",
    "PackingConfig",
    "PackingProgress",
    "EngineState",
    "ConfigError",
    "ColorMode",
    "ColorAssigner",
    "Palette",
    "NoiseField",
    "SpatialIndex",
    "Entry",
    "Rect",
    "Disc",
    "make_sizes",
]

__version__ = "0.1.0"
