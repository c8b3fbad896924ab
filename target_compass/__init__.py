"""
Target Compass Package
======================

Point-to-target compass: fuses a GPS fix and a smoothed device heading
into a live distance, bearing and turn hint toward a fixed target.

Subpackages:
    - core:     Config, logging setup, subscriber registry, source status
    - nav:      Geodesy, NavigationData snapshot, state aggregator
    - filters:  Smoothing strategies (low-pass, angle, Kalman, complementary, moving average)
    - hardware: Orientation/location source abstractions and mocks
    - state:    Orientation engine, location tracker, navigation context
    - display:  Snapshot renderers
    - nodes:    Entry points (demo)

Example:
    from target_compass.state import NavigationContext
    from target_compass.display import ConsoleDisplay
"""

__version__ = '1.0.0'
