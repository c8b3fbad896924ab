"""
Location Source
===============

Abstract base class and mock implementation for the positioning input.
The source, not the engine, is responsible for accuracy filtering: fixes
are only delivered after moving at least distance_interval meters or
after time_interval seconds.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional

import numpy as np

from target_compass.nav.geodesy import Coordinate, distance

logger = logging.getLogger(__name__)

LocationCallback = Callable[[Coordinate], None]


class LocationSourceBase(ABC):
    """Abstract base class for positioning hardware."""

    def __init__(self, accuracy: str = "best_for_navigation", **kwargs):
        self.accuracy = accuracy
        self._watching = False

    @property
    def is_watching(self) -> bool:
        return self._watching

    @abstractmethod
    def has_permission(self) -> bool:
        """Whether location access is granted."""
        pass

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask for location access; returns True if granted."""
        pass

    @abstractmethod
    def get_current_location(self, max_age: float = 1.0) -> Optional[Coordinate]:
        """One-shot fix no older than max_age seconds, or None."""
        pass

    @abstractmethod
    def start_watching(
        self,
        callback: LocationCallback,
        distance_interval: float = 1.0,
        time_interval: float = 0.5
    ) -> bool:
        """Start delivering fixes to callback."""
        pass

    @abstractmethod
    def stop_watching(self) -> None:
        """Stop delivering fixes."""
        pass


class MockLocationSource(LocationSourceBase):
    """
    Mock positioning source for testing without GPS.

    Usage:
        source = MockLocationSource(initial_fix=Coordinate(13.0443, 77.5734))
        tracker = LocationTracker(source=source)
        tracker.start()
        source.emit(Coordinate(13.0444, 77.5734))
    """

    def __init__(
        self,
        initial_fix: Optional[Coordinate] = None,
        permission_granted: bool = True,
        grant_on_request: bool = True,
        available: bool = True,
        noise_m: float = 0.0,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        **kwargs
    ):
        """
        Initialize mock location source.

        Args:
            initial_fix: Value returned by get_current_location()
            permission_granted: Initial permission state
            grant_on_request: Whether request_permission() grants access
            available: False makes start_watching() fail
            noise_m: Std-dev of position noise in meters
            seed: RNG seed for reproducible noise
            clock: Time source for interval gating
        """
        super().__init__(**kwargs)
        self.initial_fix = initial_fix
        self.permission_granted = permission_granted
        self.grant_on_request = grant_on_request
        self.available = available
        self.noise_m = noise_m

        self._rng = np.random.default_rng(seed)
        self._clock = clock
        self._callback: Optional[LocationCallback] = None
        self._distance_interval = 1.0
        self._time_interval = 0.5
        self._last_delivered: Optional[Coordinate] = None
        self._last_delivery_time = 0.0
        self.delivered: List[Coordinate] = []

    def has_permission(self) -> bool:
        return self.permission_granted

    def request_permission(self) -> bool:
        if self.grant_on_request:
            self.permission_granted = True
        return self.permission_granted

    def get_current_location(self, max_age: float = 1.0) -> Optional[Coordinate]:
        if not self.permission_granted or not self.available:
            return None
        return self.initial_fix

    def start_watching(
        self,
        callback: LocationCallback,
        distance_interval: float = 1.0,
        time_interval: float = 0.5
    ) -> bool:
        if not self.permission_granted or not self.available:
            return False
        self.stop_watching()
        self._callback = callback
        self._distance_interval = distance_interval
        self._time_interval = time_interval
        self._watching = True
        logger.info(
            f"Mock location watch started "
            f"(distance={distance_interval}m, interval={time_interval}s)")
        return True

    def stop_watching(self) -> None:
        if self._watching:
            logger.info("Mock location watch stopped")
        self._callback = None
        self._watching = False
        self._last_delivered = None

    def _should_deliver(self, fix: Coordinate) -> bool:
        if self._last_delivered is None:
            return True
        moved = distance(self._last_delivered, fix)
        elapsed = self._clock() - self._last_delivery_time
        return moved >= self._distance_interval or elapsed >= self._time_interval

    def _add_noise(self, fix: Coordinate) -> Coordinate:
        if self.noise_m <= 0:
            return fix
        # ~111,195 m per degree of latitude
        dlat, dlon = self._rng.normal(0.0, self.noise_m / 111195.0, size=2)
        return Coordinate(fix.latitude + float(dlat), fix.longitude + float(dlon))

    def emit(self, fix: Coordinate, force: bool = False) -> bool:
        """
        Push a fix through the distance/time gate.

        Returns:
            True if the fix was delivered to the watcher
        """
        if self._callback is None:
            return False
        fix = self._add_noise(fix)
        if not force and not self._should_deliver(fix):
            return False
        self._last_delivered = fix
        self._last_delivery_time = self._clock()
        self.delivered.append(fix)
        self._callback(fix)
        return True

    @staticmethod
    def walk_towards(start: Coordinate, target: Coordinate, steps: int) -> Iterator[Coordinate]:
        """Yield steps+1 evenly spaced points from start to target, inclusive."""
        steps = max(1, int(steps))
        lats = np.linspace(start.latitude, target.latitude, steps + 1)
        lons = np.linspace(start.longitude, target.longitude, steps + 1)
        for lat, lon in zip(lats, lons):
            yield Coordinate(float(lat), float(lon))
