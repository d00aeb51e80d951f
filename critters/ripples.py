"""
Ripple particle system.

Ripples are transient rings spawned at moving entities. They are stored as
structure-of-arrays (centers, ages) and compacted every tick, so removal is
a pure filter on `alpha > 0` rather than index bookkeeping.

Radius and alpha are derived from the integer age:
    radius = age * growth_per_tick
    alpha  = initial_alpha - age * fade_per_tick
so a ripple's lifetime is exact (0.5 / 0.005 = 100 ticks) instead of drifting
with accumulated subtraction error.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .data_types import RippleConfig, RippleMarker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ripple:
    """A single ripple read out of the field"""
    center: Tuple[float, float]
    radius: float
    alpha: float
    age: int

    @property
    def alive(self) -> bool:
        return self.alpha > 0.0

    def to_marker(self) -> RippleMarker:
        return RippleMarker(center=self.center, radius=self.radius, alpha=self.alpha)


class RippleField:
    """
    Growing/fading set of ripples.

    Invariant: every stored ripple has alpha > 0 after tick() returns.
    """

    def __init__(self, config: Optional[RippleConfig] = None, max_ripples: Optional[int] = None):
        """
        Args:
            config: Spawn/decay parameters (defaults from constants)
            max_ripples: Optional cap on live ripples; oldest dropped first
        """
        self.config = config or RippleConfig()
        self.max_ripples = max_ripples

        self._centers: np.ndarray = np.empty((0, 2), dtype=np.float64)
        self._ages: np.ndarray = np.empty(0, dtype=np.int64)

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    def _alpha(self, ages: np.ndarray) -> np.ndarray:
        return self.config.initial_alpha - ages * self.config.fade_per_tick

    def _radius(self, ages: np.ndarray) -> np.ndarray:
        return ages * self.config.growth_per_tick

    @property
    def lifetime_ticks(self) -> int:
        """Ticks a ripple survives (alpha reaches zero on this tick)"""
        if self.config.fade_per_tick <= 0:
            return 0  # Never fades
        return int(math.ceil(round(self.config.initial_alpha / self.config.fade_per_tick, 9)))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def spawn(self, x: float, y: float):
        """
        Add a ripple at (x, y) with radius 0 and full alpha.

        Args:
            x: Center x
            y: Center y
        """
        self._centers = np.vstack([self._centers, np.array([[x, y]], dtype=np.float64)])
        self._ages = np.append(self._ages, np.int64(0))

        if self.max_ripples is not None and len(self._ages) > self.max_ripples:
            overflow = len(self._ages) - self.max_ripples
            self._centers = self._centers[overflow:]
            self._ages = self._ages[overflow:]
            logger.debug("Ripple cap %d reached, dropped %d oldest", self.max_ripples, overflow)

    def tick(self) -> int:
        """
        Age every ripple by one tick and drop the faded ones.

        Returns:
            Number of ripples removed
        """
        if len(self._ages) == 0:
            return 0

        self._ages = self._ages + 1

        keep = self._alpha(self._ages) > 0.0
        removed = int(len(keep) - np.count_nonzero(keep))
        if removed:
            self._centers = self._centers[keep]
            self._ages = self._ages[keep]

        return removed

    def clear(self):
        """Remove every ripple"""
        self._centers = np.empty((0, 2), dtype=np.float64)
        self._ages = np.empty(0, dtype=np.int64)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._ages)

    def __iter__(self) -> Iterator[Ripple]:
        radii = self._radius(self._ages)
        alphas = self._alpha(self._ages)
        for i in range(len(self._ages)):
            yield Ripple(
                center=(float(self._centers[i, 0]), float(self._centers[i, 1])),
                radius=float(radii[i]),
                alpha=float(alphas[i]),
                age=int(self._ages[i]),
            )

    def to_list(self) -> List[RippleMarker]:
        """Ripples in creation order as renderer markers"""
        return [ripple.to_marker() for ripple in self]
