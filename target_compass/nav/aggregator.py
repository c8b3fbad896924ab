"""
Navigation State Aggregator
===========================

Combines the location and heading streams into one NavigationData snapshot.

Location and heading updates arrive independently and in any order. Each is
applied as a reducer over the current snapshot; fields the update does not
touch are carried forward. Both reducers run under one lock, so two sources
delivering on different threads cannot interleave a read-modify-write.
"""

import dataclasses
import logging
import math
import threading
from typing import Callable, List, Optional

from target_compass.core.subscriptions import SubscriberRegistry, Subscription
from .geodesy import Coordinate, distance, bearing, normalize_angle, angle_difference
from .navigation_data import NavigationData, TurnDirection, DEFAULT_ALIGNMENT_THRESHOLD

logger = logging.getLogger(__name__)


class NavigationStateAggregator:
    """
    Holds the authoritative NavigationData and republishes it on every update.

    Usage:
        aggregator = NavigationStateAggregator(Coordinate(13.0453132, 77.5733936))
        aggregator.subscribe(display.render)
        aggregator.attach(engine, tracker)

    Args:
        target: Fixed target coordinate
        alignment_threshold: |relative_angle| below this counts as aligned
    """

    def __init__(
        self,
        target: Coordinate,
        alignment_threshold: float = DEFAULT_ALIGNMENT_THRESHOLD
    ):
        self.target = target
        self.alignment_threshold = alignment_threshold

        self._lock = threading.RLock()
        self._snapshot = NavigationData(target_location=target)
        self._subscribers = SubscriberRegistry("navigation")
        self._attachments: List[Subscription] = []
        self._update_count = 0

    # -- Snapshot access --
    @property
    def snapshot(self) -> NavigationData:
        with self._lock:
            return self._snapshot

    @property
    def update_count(self) -> int:
        with self._lock:
            return self._update_count

    def is_aligned(self) -> bool:
        return self.snapshot.is_aligned(self.alignment_threshold)

    def turn_direction(self) -> Optional[TurnDirection]:
        return self.snapshot.turn_direction(self.alignment_threshold)

    # -- Reducers --
    def on_location(self, location: Coordinate) -> Optional[NavigationData]:
        """
        Recompute distance/bearing (and relative angle if heading known).

        A fix with a non-finite coordinate is ignored and returns None.
        """
        if not (math.isfinite(location.latitude) and math.isfinite(location.longitude)):
            logger.warning(f"Ignoring non-finite location: {location}")
            return None

        with self._lock:
            prev = self._snapshot
            dist = distance(location, self.target)
            brg = bearing(location, self.target)

            relative = None
            if prev.device_heading is not None:
                relative = angle_difference(prev.device_heading, brg)

            snapshot = dataclasses.replace(
                prev,
                user_location=location,
                distance=dist,
                bearing=brg,
                relative_angle=relative,
            )
            self._commit(snapshot)
            return snapshot

    def on_heading(
        self,
        heading: float,
        pitch: Optional[float] = None,
        roll: Optional[float] = None
    ) -> Optional[NavigationData]:
        """
        Store a new device heading and recompute the relative angle.

        pitch/roll are accepted so this can subscribe directly to the
        orientation engine; they are not part of the snapshot.
        """
        if not math.isfinite(heading):
            logger.warning(f"Ignoring non-finite heading: {heading}")
            return None

        with self._lock:
            prev = self._snapshot
            normalized = normalize_angle(heading)

            relative = None
            if prev.bearing is not None:
                relative = angle_difference(normalized, prev.bearing)

            snapshot = dataclasses.replace(
                prev,
                device_heading=normalized,
                relative_angle=relative,
            )
            self._commit(snapshot)
            return snapshot

    def _commit(self, snapshot: NavigationData) -> None:
        # Publish under the lock so subscribers see snapshots in commit order
        self._snapshot = snapshot
        self._update_count += 1
        self._subscribers.publish(snapshot)

    # -- Subscriptions --
    def subscribe(self, callback: Callable[[NavigationData], None]) -> Subscription:
        """Register a display callback receiving each new snapshot."""
        return self._subscribers.subscribe(callback)

    def attach(self, engine, tracker) -> None:
        """
        Subscribe to an orientation engine and a location tracker.

        Either may be None to attach only one stream.
        """
        self.detach()
        if tracker is not None:
            self._attachments.append(tracker.subscribe(self.on_location))
        if engine is not None:
            self._attachments.append(engine.subscribe(self.on_heading))
        logger.debug(f"Aggregator attached to {len(self._attachments)} stream(s)")

    def detach(self) -> None:
        """Drop upstream subscriptions. Safe to call repeatedly."""
        for subscription in self._attachments:
            subscription.unsubscribe()
        self._attachments.clear()

    def close(self) -> None:
        """Detach from upstream and drop all display subscribers."""
        self.detach()
        self._subscribers.clear()

    def __repr__(self) -> str:
        return f"NavigationStateAggregator(target={self.target}, updates={self.update_count})"
