"""
Complementary filter for gyro + accelerometer/magnetometer fusion.

The integrated rate signal is trusted over short horizons (high-pass) and
the absolute reading corrects long-term drift (low-pass).
"""

from dataclasses import dataclass
from typing import Optional

from .base import FilterBase, clamp_alpha, require_finite


@dataclass
class RateSample:
    """
    One complementary filter input.

    Attributes:
        rate: Rate signal, e.g. gyro deg/s
        absolute: Absolute reference, e.g. magnetometer heading in degrees
        dt: Time since the previous sample in seconds
    """
    rate: float
    absolute: float
    dt: float


class ComplementaryFilter(FilterBase):
    """
    v = alpha * (v + rate * dt) + (1 - alpha) * absolute

    Args:
        alpha: Weight of the integrated rate path (0-1), typically ~0.98
    """

    def __init__(self, alpha: float = 0.98):
        self.alpha = clamp_alpha(alpha)
        self._value = 0.0
        self._updated = False

    @property
    def name(self) -> str:
        return f"Complementary (alpha={self.alpha})"

    @property
    def value(self) -> Optional[float]:
        return self._value if self._updated else None

    def update(self, sample: RateSample) -> float:
        require_finite(sample.rate, sample.absolute, sample.dt)
        integrated = self._value + sample.rate * sample.dt
        self._value = self.alpha * integrated + (1.0 - self.alpha) * sample.absolute
        self._updated = True
        return self._value

    def fuse(self, rate: float, absolute: float, dt: float) -> float:
        """Convenience wrapper around update()."""
        return self.update(RateSample(rate=rate, absolute=absolute, dt=dt))

    def reset(self) -> None:
        self._value = 0.0
        self._updated = False
