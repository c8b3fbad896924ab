"""Location tracker: last known fix plus subscriber fan-out."""

import logging
import math
import threading
from typing import Callable, Optional

from target_compass.core.status import SourceErrorKind, SourceStatus
from target_compass.core.subscriptions import SubscriberRegistry, Subscription
from target_compass.hardware.location_source import LocationSourceBase
from target_compass.nav.geodesy import Coordinate

logger = logging.getLogger(__name__)


def _wrap_longitude(lon: float) -> float:
    return ((lon + 180.0) % 360.0) - 180.0


class LocationTracker:
    """
    Keeps the latest user position and republishes every accepted fix.

    Fixes are not smoothed; distance/time gating belongs to the source.

    Args:
        source: Positioning hardware (optional; fixes may be ingested directly)
        distance_interval: Minimum movement between fixes, meters
        time_interval: Minimum interval between fixes, seconds
        max_fix_age: Oldest acceptable initial fix, seconds
    """

    def __init__(
        self,
        source: Optional[LocationSourceBase] = None,
        distance_interval: float = 1.0,
        time_interval: float = 0.5,
        max_fix_age: float = 1.0
    ):
        self.source = source
        self.distance_interval = distance_interval
        self.time_interval = time_interval
        self.max_fix_age = max_fix_age

        self._lock = threading.RLock()
        self._location: Optional[Coordinate] = None
        self._subscribers = SubscriberRegistry("location")
        self._watching = False
        self.fixes_received = 0
        self.transient_failures = 0

    @classmethod
    def from_config(cls, config, source: Optional[LocationSourceBase] = None) -> 'LocationTracker':
        loc = config.location
        return cls(
            source=source,
            distance_interval=loc.distance_interval,
            time_interval=loc.time_interval,
            max_fix_age=loc.max_fix_age,
        )

    @property
    def is_watching(self) -> bool:
        return self._watching

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def get_snapshot(self) -> Optional[Coordinate]:
        """Last known fix, or None before the first one."""
        with self._lock:
            return self._location

    def ingest_location(self, location: Coordinate) -> bool:
        """
        Store a fix and notify subscribers.

        Returns:
            False if the fix was malformed and dropped
        """
        try:
            lat = float(location.latitude)
            lon = float(location.longitude)
            if not (math.isfinite(lat) and math.isfinite(lon)):
                raise ValueError(f"non-finite fix ({lat}, {lon})")
        except (TypeError, ValueError, AttributeError) as e:
            self.transient_failures += 1
            logger.warning(f"Dropped location fix: {e}")
            return False

        fix = Coordinate(max(-90.0, min(90.0, lat)), _wrap_longitude(lon))
        with self._lock:
            self._location = fix
            self.fixes_received += 1
        self._subscribers.publish(fix)
        return True

    def subscribe(self, callback: Callable[[Coordinate], None]) -> Subscription:
        """Register callback(coordinate)."""
        return self._subscribers.subscribe(callback)

    def start(self) -> SourceStatus:
        """
        Acquire permission, take an initial fix and begin watching.

        Never raises; failures are reported in the returned status.
        """
        if self._watching:
            return SourceStatus.ok("location")

        if self.source is None:
            return SourceStatus.failed(
                "location", SourceErrorKind.SOURCE_UNAVAILABLE,
                "No location source configured")

        try:
            if not self.source.has_permission():
                logger.info("Requesting location permission")
                if not self.source.request_permission():
                    return SourceStatus.failed(
                        "location", SourceErrorKind.PERMISSION_DENIED,
                        "Location permission denied. Please enable location access in settings.")

            initial = self.source.get_current_location(max_age=self.max_fix_age)
            if initial is not None:
                self.ingest_location(initial)
            else:
                logger.warning("No initial location fix available")

            started = self.source.start_watching(
                self.ingest_location,
                distance_interval=self.distance_interval,
                time_interval=self.time_interval,
            )
        except Exception as e:
            logger.error(f"Error starting location tracking: {e}")
            return SourceStatus.failed(
                "location", SourceErrorKind.SOURCE_UNAVAILABLE,
                f"Error initializing location: {e}")

        if not started:
            return SourceStatus.failed(
                "location", SourceErrorKind.SOURCE_UNAVAILABLE,
                "Failed to start location tracking")

        self._watching = True
        logger.info(
            f"Location tracking started "
            f"(distance={self.distance_interval}m, interval={self.time_interval}s)")
        return SourceStatus.ok("location")

    def stop(self) -> None:
        if not self._watching:
            return
        if self.source is not None:
            try:
                self.source.stop_watching()
            except Exception as e:
                logger.error(f"Error stopping location source: {e}")
        self._watching = False
        logger.info("Location tracking stopped")

    def teardown(self) -> None:
        """Stop watching, drop subscribers and forget the last fix. Idempotent."""
        self.stop()
        self._subscribers.clear()
        with self._lock:
            self._location = None

    def __repr__(self) -> str:
        return f"LocationTracker(location={self.get_snapshot()}, watching={self._watching})"
