"""
Orientation Fusion Engine
=========================

Turns raw orientation samples into a smoothed, calibrated device heading
and fans it out to subscribers.

Two input paths exist and only one is ever attached to a source:
- fused rotation (alpha/beta/gamma radians), preferred
- compass-only magnetometer vector, used when fused rotation is unavailable

Only heading is smoothed. Pitch and roll follow the raw rotation unless
smooth_tilt is enabled.
"""

import logging
import math
from typing import Callable, Dict, Optional

from target_compass.core.status import SourceErrorKind, SourceStatus
from target_compass.core.subscriptions import SubscriberRegistry, Subscription
from target_compass.filters import AngleFilter, FilterBase, LowPassFilter
from target_compass.hardware.orientation_source import (
    MagneticSample,
    OrientationSample,
    OrientationSourceBase,
)
from target_compass.nav.geodesy import normalize_angle

logger = logging.getLogger(__name__)

HeadingCallback = Callable[[float, float, float], None]

MODE_DEVICE_MOTION = "device_motion"
MODE_MAGNETOMETER = "magnetometer"


class OrientationFusionEngine:
    """
    Heading/pitch/roll state with calibration and subscriber fan-out.

    Args:
        source: Orientation hardware (optional; samples may be ingested directly)
        heading_filter: Filter that smooths heading (default AngleFilter(0.2))
        tilt_alpha: Low-pass factor for pitch/roll when smooth_tilt is on
        smooth_tilt: Smooth pitch/roll as well as heading
        update_interval: Requested sensor period in seconds
        prefer_device_motion: Try fused rotation before the magnetometer
    """

    def __init__(
        self,
        source: Optional[OrientationSourceBase] = None,
        heading_filter: Optional[FilterBase] = None,
        tilt_alpha: float = 0.3,
        smooth_tilt: bool = False,
        update_interval: float = 0.1,
        prefer_device_motion: bool = True
    ):
        self.source = source
        self.heading_filter = heading_filter or AngleFilter(0.2)
        self.pitch_filter = LowPassFilter(tilt_alpha)
        self.roll_filter = LowPassFilter(tilt_alpha)
        self.smooth_tilt = smooth_tilt
        self.update_interval = update_interval
        self.prefer_device_motion = prefer_device_motion

        # Current sensor values (degrees)
        self._heading = 0.0
        self._pitch = 0.0
        self._roll = 0.0
        self._smoothed_heading = 0.0   # Filter output before calibration offset
        self._has_sample = False

        # Calibration
        self._calibration_offset = 0.0
        self._calibrated = False

        self._subscribers = SubscriberRegistry("orientation")
        self._mode: Optional[str] = None
        self.samples_processed = 0
        self.transient_failures = 0

    @classmethod
    def from_config(
        cls,
        config,
        source: Optional[OrientationSourceBase] = None,
        heading_filter: Optional[FilterBase] = None
    ) -> 'OrientationFusionEngine':
        """Build from a Config object (filters + orientation sections)."""
        if heading_filter is None:
            heading_filter = AngleFilter(config.filters.heading_alpha)
        return cls(
            source=source,
            heading_filter=heading_filter,
            tilt_alpha=config.filters.tilt_alpha,
            smooth_tilt=config.orientation.smooth_tilt,
            update_interval=config.orientation.update_interval,
            prefer_device_motion=config.orientation.prefer_device_motion,
        )

    # -- Accessors --
    @property
    def heading(self) -> float:
        return self._heading

    @property
    def pitch(self) -> float:
        return self._pitch

    @property
    def roll(self) -> float:
        return self._roll

    @property
    def has_sample(self) -> bool:
        return self._has_sample

    @property
    def calibration_offset(self) -> float:
        return self._calibration_offset

    @property
    def is_calibrated(self) -> bool:
        return self._calibrated

    @property
    def mode(self) -> Optional[str]:
        """Input path attached to the source, or None when stopped."""
        return self._mode

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def get_orientation(self) -> Dict[str, float]:
        return {
            'heading': self._heading,
            'pitch': self._pitch,
            'roll': self._roll,
        }

    # -- Ingest paths --
    def ingest_orientation(self, sample: OrientationSample) -> bool:
        """
        Process a fused rotation sample.

        Returns:
            False if the sample was dropped as a transient failure
        """
        try:
            heading = math.degrees(float(sample.alpha))
            pitch = math.degrees(float(sample.beta))
            roll = math.degrees(float(sample.gamma))
            # Checked after conversion: huge finite radians overflow to inf
            if not all(math.isfinite(v) for v in (heading, pitch, roll)):
                raise ValueError(f"non-finite rotation ({heading}, {pitch}, {roll})")

            self._apply_heading(heading)
            if self.smooth_tilt:
                pitch = self.pitch_filter.update(pitch)
                roll = self.roll_filter.update(roll)
            self._pitch = pitch
            self._roll = roll
        except Exception as e:
            self._transient_failure("rotation", e)
            return False

        self._notify()
        return True

    def ingest_compass_only(self, vector: MagneticSample) -> bool:
        """
        Process a raw magnetometer sample (fallback path).

        Heading is atan2(y, x); pitch/roll keep their last values.
        """
        try:
            x, y = float(vector.x), float(vector.y)
            if not (math.isfinite(x) and math.isfinite(y)):
                raise ValueError(f"non-finite magnetic vector ({x}, {y})")
            self._apply_heading(math.degrees(math.atan2(y, x)))
        except Exception as e:
            self._transient_failure("magnetometer", e)
            return False

        self._notify()
        return True

    def _apply_heading(self, raw_heading: float) -> None:
        # Filters raise before mutating, so a rejected sample leaves them intact
        smoothed = self.heading_filter.update(normalize_angle(raw_heading))
        if not math.isfinite(smoothed):
            raise ValueError(f"filter produced non-finite heading {smoothed}")
        self._smoothed_heading = smoothed
        self._heading = normalize_angle(smoothed + self._calibration_offset)
        self._has_sample = True
        self.samples_processed += 1

    def _transient_failure(self, path: str, error: Exception) -> None:
        # Last known state is kept and no update is published
        self.transient_failures += 1
        logger.warning(f"Dropped {path} sample: {error}")

    def _notify(self) -> None:
        self._subscribers.publish(self._heading, self._pitch, self._roll)

    # -- Calibration --
    def calibrate(self, true_heading: float) -> None:
        """
        Align the current physical orientation with true_heading.

        The offset is measured against the smoothed heading before any
        previous offset, so repeated calls overwrite rather than accumulate.
        """
        self._calibration_offset = true_heading - self._smoothed_heading
        self._calibrated = True
        self._heading = normalize_angle(self._smoothed_heading + self._calibration_offset)
        logger.info(
            f"Compass calibrated to {true_heading:.1f} deg "
            f"(offset {self._calibration_offset:+.1f} deg)")

    def reset_calibration(self) -> None:
        """Clear the calibration offset."""
        self._calibration_offset = 0.0
        self._calibrated = False
        self._heading = normalize_angle(self._smoothed_heading)
        logger.info("Compass calibration reset")

    # -- Subscriptions --
    def subscribe(self, callback: HeadingCallback) -> Subscription:
        """Register callback(heading, pitch, roll)."""
        return self._subscribers.subscribe(callback)

    # -- Lifecycle --
    def start(self) -> SourceStatus:
        """
        Attach to the orientation source.

        Fused rotation is used when available; the magnetometer only when it
        is not. The two are never attached together.
        """
        if self._mode is not None:
            return SourceStatus.ok("orientation", mode=self._mode)

        if self.source is None:
            return SourceStatus.failed(
                "orientation", SourceErrorKind.SOURCE_UNAVAILABLE,
                "No orientation source configured")

        try:
            if not self.source.has_permission() and not self.source.request_permission():
                return SourceStatus.failed(
                    "orientation", SourceErrorKind.PERMISSION_DENIED,
                    "Motion sensor permission denied. Please enable motion access in settings.")

            availability = self.source.check_availability()
            if not availability.any_heading:
                return SourceStatus.failed(
                    "orientation", SourceErrorKind.SOURCE_UNAVAILABLE,
                    "Device sensors not available")

            self.source.set_update_interval(self.update_interval)

            use_motion = availability.device_motion and (
                self.prefer_device_motion or not availability.magnetometer)
            if use_motion:
                started = self.source.start_device_motion(self.ingest_orientation)
                mode = MODE_DEVICE_MOTION
            else:
                started = self.source.start_magnetometer(self.ingest_compass_only)
                mode = MODE_MAGNETOMETER
        except Exception as e:
            logger.error(f"Error starting sensors: {e}")
            return SourceStatus.failed(
                "orientation", SourceErrorKind.SOURCE_UNAVAILABLE,
                f"Error initializing sensors: {e}")

        if not started:
            return SourceStatus.failed(
                "orientation", SourceErrorKind.SOURCE_UNAVAILABLE,
                "Failed to start sensors")

        self._mode = mode
        logger.info(f"Orientation engine started ({mode})")
        return SourceStatus.ok("orientation", mode=mode)

    def stop(self) -> None:
        """Detach from the source. Safe when never started."""
        if self._mode is None:
            return
        if self.source is not None:
            try:
                self.source.stop()
            except Exception as e:
                logger.error(f"Error stopping orientation source: {e}")
        logger.info(f"Orientation engine stopped ({self._mode})")
        self._mode = None

    def teardown(self) -> None:
        """Stop, drop all subscribers and reset filter state. Idempotent."""
        self.stop()
        self._subscribers.clear()
        self.heading_filter.reset()
        self.pitch_filter.reset()
        self.roll_filter.reset()

    def __repr__(self) -> str:
        return (
            f"OrientationFusionEngine(heading={self._heading:.1f}, "
            f"mode={self._mode}, calibrated={self._calibrated})"
        )
