"""
Filters Module
==============

Interchangeable smoothing strategies for noisy sensor signals:
- Exponential low-pass
- Circular (angle) exponential average
- Scalar Kalman estimator
- Complementary (rate + absolute) fusion
- Moving average

Uses Strategy pattern so the orientation engine is parameterized by the
filter instance that smooths heading.
"""

from .base import FilterBase
from .low_pass import LowPassFilter
from .angle_filter import AngleFilter
from .kalman import KalmanFilter
from .complementary import ComplementaryFilter, RateSample
from .moving_average import MovingAverageFilter
from .factory import FilterFactory, create_filter

__all__ = [
    'FilterBase',
    'LowPassFilter',
    'AngleFilter',
    'KalmanFilter',
    'ComplementaryFilter',
    'RateSample',
    'MovingAverageFilter',
    'FilterFactory',
    'create_filter',
]
