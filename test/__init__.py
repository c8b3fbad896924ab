"""
Target Compass - Test Suite
===========================

Unit tests for the navigation math, filters, engines and their mocks.

Test Categories:
    - unit/test_geodesy.py            : Distance, bearing, angle helpers
    - unit/test_filters.py            : Filter bank and factory
    - unit/test_subscriptions.py      : Subscriber registry
    - unit/test_orientation_engine.py : Heading fusion and calibration
    - unit/test_location_tracker.py   : Location tracking
    - unit/test_aggregator.py         : NavigationData reducers
    - unit/test_context.py            : Session lifecycle
    - unit/test_display.py            : Console rendering
    - unit/test_hardware.py           : Mock sources
    - unit/test_config.py             : Configuration loading

Usage:
    # Run all tests
    pytest test/

    # Run specific test with verbose output
    pytest test/unit/test_geodesy.py -v
"""

__version__ = "1.0.0"
