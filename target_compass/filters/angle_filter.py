"""
Circular exponential average for angles.

A linear average of 350 and 10 gives 180, pointing the wrong way. Averaging
the sine and cosine components separately and rebuilding the angle with
atan2 gives ~0, which is what a compass needs.
"""

import math
from typing import Optional

from .base import FilterBase, clamp_alpha, require_finite


class AngleFilter(FilterBase):
    """
    Exponential moving average over the unit circle.

    The sin/cos accumulators start at zero and every sample, the first
    included, goes through the same recursion. The first output is still the
    first sample's angle since only the vector length differs.

    Args:
        alpha: Smoothing factor (0-1) applied to the sin/cos accumulators
    """

    def __init__(self, alpha: float = 0.15):
        self.alpha = clamp_alpha(alpha)
        self._sin_avg = 0.0
        self._cos_avg = 0.0
        self._initialized = False

    @property
    def name(self) -> str:
        return f"Circular average (alpha={self.alpha})"

    @property
    def value(self) -> Optional[float]:
        if not self._initialized:
            return None
        return self._angle()

    def update(self, sample: float) -> float:
        """Feed an angle in degrees; returns the smoothed angle in [0, 360)."""
        require_finite(sample)
        rad = math.radians(sample)
        sin_avg = self.alpha * math.sin(rad) + (1.0 - self.alpha) * self._sin_avg
        cos_avg = self.alpha * math.cos(rad) + (1.0 - self.alpha) * self._cos_avg
        require_finite(sin_avg, cos_avg)

        self._sin_avg = sin_avg
        self._cos_avg = cos_avg
        self._initialized = True
        return self._angle()

    def _angle(self) -> float:
        deg = math.degrees(math.atan2(self._sin_avg, self._cos_avg))
        deg = deg % 360.0
        return 0.0 if deg >= 360.0 else deg

    @property
    def resultant_length(self) -> float:
        """
        Length of the averaged vector, 0..1.

        Grows toward 1 while recent samples agree; near 0 when they cancel out.
        """
        return math.hypot(self._sin_avg, self._cos_avg)

    def reset(self) -> None:
        self._sin_avg = 0.0
        self._cos_avg = 0.0
        self._initialized = False
