"""NavigationContext: owns the engine, tracker and aggregator for one session."""

import logging
import threading
from typing import Callable, List, Optional

from target_compass.core.config import Config, get_config
from target_compass.core.status import InitResult
from target_compass.core.subscriptions import Subscription
from target_compass.filters import AngleFilter, ComplementaryFilter, FilterBase, FilterFactory
from target_compass.hardware.location_source import LocationSourceBase
from target_compass.hardware.orientation_source import OrientationSourceBase
from target_compass.nav.aggregator import NavigationStateAggregator
from target_compass.nav.geodesy import Coordinate
from target_compass.nav.navigation_data import NavigationData

from .location_tracker import LocationTracker
from .orientation_engine import OrientationFusionEngine

logger = logging.getLogger(__name__)

MAX_ERRORS = 10


def build_heading_filter(config: Config) -> FilterBase:
    """
    Heading filter named by config.filters.heading_filter.

    Filters that cannot smooth a bare heading fall back to AngleFilter.
    """
    filters = config.filters
    try:
        heading_filter = FilterFactory.create_from_config(filters)
    except ValueError as e:
        logger.error(f"{e}; using angle filter")
        return AngleFilter(filters.heading_alpha)

    if isinstance(heading_filter, ComplementaryFilter):
        logger.error("Complementary filter needs a rate input; using angle filter for heading")
        return AngleFilter(filters.heading_alpha)

    if not FilterFactory.is_angle_safe(filters.heading_filter):
        logger.warning(
            f"Heading filter '{filters.heading_filter}' does not handle the 0/360 wrap; "
            f"headings near north will be averaged incorrectly")
    return heading_filter


class NavigationContext:
    """
    One navigation session: sources in, NavigationData snapshots out.

    Usage:
        context = NavigationContext(location_source=gps, orientation_source=imu)
        context.subscribe(display.render)
        result = context.start()
        if not result.success:
            print(result.errors)
        ...
        context.shutdown()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        location_source: Optional[LocationSourceBase] = None,
        orientation_source: Optional[OrientationSourceBase] = None,
        heading_filter: Optional[FilterBase] = None
    ):
        self.config = config or get_config()
        target = self.config.target

        self.target = Coordinate(target.latitude, target.longitude)
        self.target_name = target.name

        self.engine = OrientationFusionEngine.from_config(
            self.config,
            source=orientation_source,
            heading_filter=heading_filter or build_heading_filter(self.config),
        )
        self.tracker = LocationTracker.from_config(self.config, source=location_source)
        self.aggregator = NavigationStateAggregator(
            self.target,
            alignment_threshold=self.config.navigation.alignment_threshold,
        )

        self._shutdown_event = threading.Event()
        self._started = False
        self._error_lock = threading.RLock()
        self._errors: List[str] = []

    @property
    def running(self) -> bool:
        return self._started and not self._shutdown_event.is_set()

    @property
    def snapshot(self) -> NavigationData:
        return self.aggregator.snapshot

    def subscribe(self, callback: Callable[[NavigationData], None]) -> Subscription:
        """Register a display callback for navigation snapshots."""
        return self.aggregator.subscribe(callback)

    def start(self) -> InitResult:
        """
        Attach the aggregator, then start location tracking, then sensors.

        Failures do not raise; they are returned and recorded in get_errors().
        """
        if self._shutdown_event.is_set():
            raise RuntimeError("NavigationContext has been shut down")

        self.aggregator.attach(self.engine, self.tracker)
        location_status = self.tracker.start()
        orientation_status = self.engine.start()
        result = InitResult(location=location_status, orientation=orientation_status)

        for status in (location_status, orientation_status):
            if not status.success:
                self.add_error(status.source, status.message)
                logger.error(f"Failed to start {status}")

        self._started = True
        logger.info(
            f"Navigating to {self.target_name} {self.target} "
            f"(location={'ok' if location_status.success else 'failed'}, "
            f"orientation={orientation_status.mode or 'failed'})")
        return result

    def calibrate(self, true_heading: float) -> None:
        self.engine.calibrate(true_heading)

    def reset_calibration(self) -> None:
        self.engine.reset_calibration()

    def shutdown(self) -> None:
        """Release sources and subscribers. Safe to call more than once."""
        if self._shutdown_event.is_set():
            return
        self._shutdown_event.set()
        self.aggregator.close()
        self.engine.teardown()
        self.tracker.teardown()
        logger.info("Navigation context shut down")

    # -- Error tracking --
    def add_error(self, source: str, error: str) -> None:
        with self._error_lock:
            self._errors.append(f"{source}: {error}")
            if len(self._errors) > MAX_ERRORS:
                self._errors = self._errors[-MAX_ERRORS:]

    def get_errors(self) -> List[str]:
        with self._error_lock:
            return self._errors[:]

    def clear_errors(self) -> None:
        with self._error_lock:
            self._errors.clear()

    def __enter__(self) -> 'NavigationContext':
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
