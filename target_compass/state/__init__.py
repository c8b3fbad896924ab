"""State package - orientation engine, location tracker and session context."""

from .orientation_engine import OrientationFusionEngine, MODE_DEVICE_MOTION, MODE_MAGNETOMETER
from .location_tracker import LocationTracker
from .context import NavigationContext, build_heading_filter

__all__ = [
    'OrientationFusionEngine',
    'MODE_DEVICE_MOTION',
    'MODE_MAGNETOMETER',
    'LocationTracker',
    'NavigationContext',
    'build_heading_filter',
]
