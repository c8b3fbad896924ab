"""
Hardware Module
===============

Source abstractions feeding the navigation engine:
- Orientation source (fused rotation or compass-only), real and mock
- Location source (GPS fixes), real and mock

Platform driver bindings live outside this package and subclass the
*SourceBase classes.
"""

from .orientation_source import (
    OrientationSample,
    MagneticSample,
    SensorAvailability,
    OrientationSourceBase,
    MockOrientationSource,
)
from .location_source import LocationSourceBase, MockLocationSource

__all__ = [
    # Orientation
    'OrientationSample',
    'MagneticSample',
    'SensorAvailability',
    'OrientationSourceBase',
    'MockOrientationSource',

    # Location
    'LocationSourceBase',
    'MockLocationSource',
]
