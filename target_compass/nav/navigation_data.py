"""Immutable navigation snapshot published to displays."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from .geodesy import Coordinate

DEFAULT_ALIGNMENT_THRESHOLD = 10.0  # degrees


class TurnDirection(Enum):
    """Turn hint derived from the relative angle."""
    ALIGNED = "aligned"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class NavigationData:
    """
    Snapshot of the navigation state.

    Attributes:
        target_location: Fixed target coordinate
        user_location: Last known user position (None until first fix)
        distance: Meters from user to target (None without a fix)
        bearing: Initial bearing user -> target, degrees [0, 360)
        device_heading: Smoothed device heading, degrees [0, 360)
        relative_angle: angle_difference(device_heading, bearing), (-180, 180]
    """
    target_location: Coordinate
    user_location: Optional[Coordinate] = None
    distance: Optional[float] = None
    bearing: Optional[float] = None
    device_heading: Optional[float] = None
    relative_angle: Optional[float] = None

    def __post_init__(self):
        has_fix = self.user_location is not None
        if (self.distance is not None) != has_fix or (self.bearing is not None) != has_fix:
            raise ValueError("distance and bearing must be set iff user_location is set")
        can_relate = self.bearing is not None and self.device_heading is not None
        if (self.relative_angle is not None) != can_relate:
            raise ValueError("relative_angle must be set iff bearing and device_heading are set")

    @property
    def has_location(self) -> bool:
        return self.user_location is not None

    @property
    def has_heading(self) -> bool:
        return self.device_heading is not None

    def is_aligned(self, threshold: float = DEFAULT_ALIGNMENT_THRESHOLD) -> bool:
        """True when the device points at the target within threshold degrees."""
        if self.relative_angle is None:
            return False
        return abs(self.relative_angle) < threshold

    def turn_direction(
        self,
        threshold: float = DEFAULT_ALIGNMENT_THRESHOLD
    ) -> Optional[TurnDirection]:
        """
        Turn hint for the display.

        Positive relative angle means turn left, negative means turn right.
        """
        if self.relative_angle is None:
            return None
        if abs(self.relative_angle) < threshold:
            return TurnDirection.ALIGNED
        if self.relative_angle > 0:
            return TurnDirection.LEFT
        return TurnDirection.RIGHT

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
