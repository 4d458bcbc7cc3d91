"""
Candidate radius pools for new discs.
"""

import numpy as np
from typing import Tuple

from .config import PackingConfig


def make_sizes(config: PackingConfig, noise_value: float) -> Tuple[float, ...]:
    """
    Make the ascending pool of radii a disc may take at a location.

    The noise value picks an upper bound between rmin and rmax; the pool steps
    by rincr from rvar * upper (never below rmin) up to, but excluding, that
    bound. A collapsed range yields the single radius at the lower bound.
    """
    rmin, rmax = config.rmin, config.rmax
    upper = float(np.clip(rmin + noise_value * (rmax - rmin), rmin, rmax))
    lower = float(np.clip(upper * config.rvar, rmin, upper))

    if lower < upper:
        sizes = np.arange(lower, upper, config.rincr)
        # arange can overshoot its stop by a rounding error
        sizes = sizes[sizes < upper]
        return tuple(float(r) for r in sizes)
    return (lower,)
