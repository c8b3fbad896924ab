"""Sliding-window arithmetic mean."""

from collections import deque
from typing import Deque, Optional

import numpy as np

from .base import FilterBase, require_finite


class MovingAverageFilter(FilterBase):
    """
    Mean of the last window_size raw samples. Oldest sample is evicted first.

    Args:
        window_size: Number of samples averaged (minimum 1)
    """

    def __init__(self, window_size: int = 5):
        self.window_size = max(1, int(window_size))
        self._buffer: Deque[float] = deque(maxlen=self.window_size)

    @property
    def name(self) -> str:
        return f"Moving average (window={self.window_size})"

    @property
    def value(self) -> Optional[float]:
        if not self._buffer:
            return None
        return float(np.mean(self._buffer))

    @property
    def is_full(self) -> bool:
        return len(self._buffer) == self.window_size

    def update(self, sample: float) -> float:
        require_finite(sample)
        self._buffer.append(float(sample))
        return float(np.mean(self._buffer))

    def reset(self) -> None:
        self._buffer.clear()
