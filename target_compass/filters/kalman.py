"""One-dimensional Kalman-style estimator."""

from typing import Optional

from .base import FilterBase, require_finite


class KalmanFilter(FilterBase):
    """
    Scalar Kalman filter with constant process and measurement noise.

    Reduces noise while still following real changes quickly. The first
    measurement seeds the estimate with no correction step.

    Args:
        process_noise: q, how much the true value is expected to drift per step
        measurement_noise: r, variance of the sensor reading
    """

    INITIAL_ERROR = 1.0

    def __init__(self, process_noise: float = 0.01, measurement_noise: float = 0.1):
        self.process_noise = process_noise
        self.measurement_noise = measurement_noise
        self._estimate: Optional[float] = None
        self._error_estimate = self.INITIAL_ERROR
        self._gain = 0.0

    @property
    def name(self) -> str:
        return f"Kalman (q={self.process_noise}, r={self.measurement_noise})"

    @property
    def value(self) -> Optional[float]:
        return self._estimate

    @property
    def error_estimate(self) -> float:
        return self._error_estimate

    @property
    def gain(self) -> float:
        """Kalman gain used by the most recent correction."""
        return self._gain

    def update(self, sample: float) -> float:
        require_finite(sample)
        if self._estimate is None:
            self._estimate = float(sample)
            return self._estimate

        # Prediction
        predicted = self._estimate
        predicted_error = self._error_estimate + self.process_noise

        # Correction
        denominator = predicted_error + self.measurement_noise
        # Zero total variance: the estimate is exact and the reading is ignored
        self._gain = predicted_error / denominator if denominator > 0 else 0.0
        self._estimate = predicted + self._gain * (sample - predicted)
        self._error_estimate = (1.0 - self._gain) * predicted_error

        return self._estimate

    def reset(self) -> None:
        self._estimate = None
        self._error_estimate = self.INITIAL_ERROR
        self._gain = 0.0
