"""
Navigation Display
==================

Renderers receiving NavigationData snapshots from the aggregator.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from target_compass.nav.geodesy import format_distance, round_half_up
from target_compass.nav.navigation_data import (
    DEFAULT_ALIGNMENT_THRESHOLD,
    NavigationData,
    TurnDirection,
)

logger = logging.getLogger(__name__)

HINTS = {
    TurnDirection.ALIGNED: "Aligned with target",
    TurnDirection.LEFT: "Turn left",
    TurnDirection.RIGHT: "Turn right",
}


class NavigationDisplay(ABC):
    """Base class for anything that shows navigation state to the user."""

    @abstractmethod
    def render(self, data: NavigationData) -> None:
        pass

    def __call__(self, data: NavigationData) -> None:
        self.render(data)


class ConsoleDisplay(NavigationDisplay):
    """
    Text renderer.

    Sections appear only once their values are known. Lines are logged at
    INFO by default, or handed to `writer` (e.g. print) if given.
    """

    def __init__(
        self,
        target_name: str = "",
        alignment_threshold: float = DEFAULT_ALIGNMENT_THRESHOLD,
        writer: Optional[Callable[[str], None]] = None
    ):
        self.target_name = target_name
        self.alignment_threshold = alignment_threshold
        self.writer = writer
        self.last_lines: List[str] = []
        self.frames_rendered = 0

    def format(self, data: NavigationData) -> List[str]:
        lines = []
        if self.target_name:
            lines.append(f"Target: {self.target_name}")
        if data.distance is not None:
            lines.append(f"Distance: {format_distance(data.distance)} ({round_half_up(data.distance)} meters)")
        if data.bearing is not None:
            lines.append(f"Bearing to Target: {round_half_up(data.bearing)}°")
        if data.device_heading is not None:
            lines.append(f"Device Heading: {round_half_up(data.device_heading)}°")
        if data.relative_angle is not None:
            lines.append(f"Relative Angle: {round_half_up(data.relative_angle)}°")
            direction = data.turn_direction(self.alignment_threshold)
            lines.append(HINTS[direction])
        return lines

    def render(self, data: NavigationData) -> None:
        self.last_lines = self.format(data)
        self.frames_rendered += 1
        text = " | ".join(self.last_lines)
        if self.writer is not None:
            self.writer(text)
        else:
            logger.info(text)
