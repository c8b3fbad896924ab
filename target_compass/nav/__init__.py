"""Navigation package - geodesy, navigation snapshot and state aggregation."""

from .geodesy import (
    Coordinate,
    EARTH_RADIUS_M,
    distance,
    bearing,
    normalize_angle,
    angle_difference,
    format_distance,
    format_distance_simple,
    round_half_up,
)
from .navigation_data import NavigationData, TurnDirection, DEFAULT_ALIGNMENT_THRESHOLD
from .aggregator import NavigationStateAggregator

__all__ = [
    'Coordinate',
    'EARTH_RADIUS_M',
    'distance',
    'bearing',
    'normalize_angle',
    'angle_difference',
    'format_distance',
    'format_distance_simple',
    'round_half_up',
    'NavigationData',
    'TurnDirection',
    'DEFAULT_ALIGNMENT_THRESHOLD',
    'NavigationStateAggregator',
]
