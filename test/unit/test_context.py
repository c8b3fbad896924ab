"""
Navigation Context Tests
========================

Unit tests for session wiring, startup results and shutdown.
"""

import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from target_compass.core.config import Config
from target_compass.core.status import SourceErrorKind
from target_compass.filters import AngleFilter, KalmanFilter, LowPassFilter
from target_compass.hardware import MockLocationSource, MockOrientationSource
from target_compass.nav import TurnDirection
from target_compass.state import NavigationContext, build_heading_filter


class TestStart:
    """Test NavigationContext.start()."""

    def test_success(self, config, location_source, orientation_source):
        """Test both sources start and the first fix reaches the snapshot."""
        context = NavigationContext(config, location_source, orientation_source)
        result = context.start()

        assert result.success
        assert result.sensor_active
        assert result.location_permission_granted
        assert result.errors == []
        assert context.running
        assert context.snapshot.distance == pytest.approx(111.0, abs=1.0)

    def test_location_permission_denied(self, config, orientation_source):
        """Test denied location is reported and sensors still start."""
        location = MockLocationSource(permission_granted=False, grant_on_request=False)
        context = NavigationContext(config, location, orientation_source)
        result = context.start()

        assert not result.success
        assert not result.location_permission_granted
        assert result.sensor_active
        assert result.first_error.error_kind is SourceErrorKind.PERMISSION_DENIED
        assert len(context.get_errors()) == 1

    def test_sensors_unavailable(self, config, location_source):
        """Test missing sensors are reported."""
        orientation = MockOrientationSource(device_motion=False, magnetometer=False)
        context = NavigationContext(config, location_source, orientation)
        result = context.start()

        assert not result.sensor_active
        assert result.orientation.error_kind is SourceErrorKind.SOURCE_UNAVAILABLE
        assert any("orientation" in e for e in result.errors)

    def test_no_sources(self, config):
        """Test a context without sources reports both failures."""
        result = NavigationContext(config).start()
        assert not result.success
        assert len(result.errors) == 2

    def test_start_after_shutdown(self, config):
        """Test a shut down context cannot restart."""
        context = NavigationContext(config)
        context.shutdown()
        with pytest.raises(RuntimeError):
            context.start()


class TestSession:
    """Test a running session."""

    def test_display_updates(self, config, location_source, orientation_source):
        """Test subscribers see heading and location updates."""
        context = NavigationContext(config, location_source, orientation_source)
        received = []
        context.subscribe(received.append)
        context.start()

        orientation_source.emit_heading(190.0)

        assert received[-1].turn_direction() is TurnDirection.LEFT
        assert received[-1].relative_angle == pytest.approx(170.0, abs=0.1)

    def test_calibrate_passthrough(self, config, location_source, orientation_source):
        """Test calibration reaches the engine and the snapshot."""
        context = NavigationContext(config, location_source, orientation_source)
        context.start()
        orientation_source.emit_heading(90.0)

        context.calibrate(0.0)
        orientation_source.emit_heading(90.0)
        assert context.engine.is_calibrated
        assert context.snapshot.is_aligned()

        context.reset_calibration()
        assert not context.engine.is_calibrated

    def test_shutdown_idempotent(self, config, location_source, orientation_source):
        """Test shutdown releases sources and can be repeated."""
        context = NavigationContext(config, location_source, orientation_source)
        context.start()
        context.shutdown()
        context.shutdown()

        assert not context.running
        assert not orientation_source.is_active
        assert not location_source.is_watching

    def test_shutdown_never_started(self, config, location_source, orientation_source):
        """Test shutdown before start is safe and can be repeated."""
        context = NavigationContext(config, location_source, orientation_source)
        context.shutdown()
        context.shutdown()

        assert not context.running
        assert not orientation_source.is_active
        assert not location_source.is_watching
        assert context.get_errors() == []

    def test_context_manager(self, config, location_source, orientation_source):
        """Test with-block shuts down."""
        with NavigationContext(config, location_source, orientation_source) as context:
            context.start()
        assert not context.running

    def test_error_list_bounded(self, config):
        """Test error history keeps the last ten entries."""
        context = NavigationContext(config)
        for i in range(15):
            context.add_error("test", f"error {i}")
        errors = context.get_errors()
        assert len(errors) == 10
        assert errors[-1] == "test: error 14"
        context.clear_errors()
        assert context.get_errors() == []


class TestHeadingFilterSelection:
    """Test build_heading_filter()."""

    def test_default_angle(self, config):
        """Test default configuration yields AngleFilter."""
        f = build_heading_filter(config)
        assert isinstance(f, AngleFilter)
        assert f.alpha == config.filters.heading_alpha

    def test_kalman(self, config):
        """Test scalar filters are honoured."""
        config.filters.heading_filter = 'kalman'
        assert isinstance(build_heading_filter(config), KalmanFilter)

    def test_complementary_falls_back(self, config):
        """Test complementary filter is replaced by AngleFilter."""
        config.filters.heading_filter = 'complementary'
        assert isinstance(build_heading_filter(config), AngleFilter)

    def test_unknown_falls_back(self, config):
        """Test unknown filter name is replaced by AngleFilter."""
        config.filters.heading_filter = 'median'
        assert isinstance(build_heading_filter(config), AngleFilter)

    def test_injected_filter_used(self, config):
        """Test an explicit heading filter wins over config."""
        heading_filter = LowPassFilter(0.5)
        context = NavigationContext(config, heading_filter=heading_filter)
        assert context.engine.heading_filter is heading_filter

    def test_alignment_threshold_from_config(self, config):
        """Test aggregator threshold follows configuration."""
        config.navigation.alignment_threshold = 25.0
        context = NavigationContext(config)
        assert context.aggregator.alignment_threshold == 25.0


class TestDefaultConfig:
    """Test the context without an explicit config."""

    def setup_method(self):
        """Reset config singleton before each test."""
        Config.reset()

    def teardown_method(self):
        Config.reset()

    def test_uses_global_config(self):
        """Test the global config supplies the target."""
        context = NavigationContext()
        assert context.target_name == Config().target.name
        assert context.target.latitude == Config().target.latitude


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
