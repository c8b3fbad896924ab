"""Exponential low-pass filter."""

from typing import Optional

from .base import FilterBase, clamp_alpha, require_finite


class LowPassFilter(FilterBase):
    """
    Low-pass filter for smoothing noisy sensor data.

    v = alpha * sample + (1 - alpha) * v. The first sample seeds v directly,
    so there is no warm-up lag.

    Args:
        alpha: Smoothing factor (0-1). Lower = smoother but slower response
    """

    def __init__(self, alpha: float = 0.2):
        self.alpha = clamp_alpha(alpha)
        self._value: Optional[float] = None

    @property
    def name(self) -> str:
        return f"Low-pass (alpha={self.alpha})"

    @property
    def value(self) -> Optional[float]:
        return self._value

    def update(self, sample: float) -> float:
        require_finite(sample)
        if self._value is None:
            self._value = float(sample)
        else:
            self._value = self.alpha * sample + (1.0 - self.alpha) * self._value
        return self._value

    def reset(self) -> None:
        self._value = None
