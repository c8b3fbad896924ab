"""
Filter Base Class
=================

Abstract base class for all smoothing filters.
Implements Strategy pattern so the orientation engine can swap the
noise-reduction method without touching the fusion logic.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Optional


def require_finite(*values: float) -> None:
    """Raise ValueError before any state is touched if a value is NaN or infinite."""
    for v in values:
        if not math.isfinite(v):
            raise ValueError(f"non-finite filter input {v}")


def clamp_alpha(alpha: float) -> float:
    """Clamp a smoothing factor to [0, 1]."""
    return max(0.0, min(1.0, float(alpha)))


class FilterBase(ABC):
    """
    Abstract base class for smoothing filters.

    Subclasses own their internal state exclusively. A filter is
    deterministic given its update sequence and is not thread-safe; the
    caller serializes access.

    Usage:
        f = LowPassFilter(alpha=0.3)
        smoothed = f.update(raw)
        f.reset()
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable filter name."""
        pass

    @abstractmethod
    def update(self, sample: Any) -> float:
        """Feed one sample and return the smoothed value."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Return to the uninitialized condition."""
        pass

    @property
    def value(self) -> Optional[float]:
        """Current smoothed value, or None before the first update."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value})"
