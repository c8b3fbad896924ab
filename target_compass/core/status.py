"""
Source Status
=============

Explicit result values for acquiring the location and orientation sources.
Initialization never raises; callers inspect these instead.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class SourceErrorKind(Enum):
    """Why a source could not deliver data."""
    SOURCE_UNAVAILABLE = auto()         # No usable hardware / positioning
    PERMISSION_DENIED = auto()          # Access refused upstream
    TRANSIENT_SOURCE_FAILURE = auto()   # Single sample failed, engine carries on


@dataclass
class SourceStatus:
    """
    Outcome of starting one source.

    Attributes:
        source: "location" or "orientation"
        success: Whether the source is now delivering samples
        error_kind: Failure category (None on success)
        message: Human-readable explanation
        mode: Active input mode, e.g. "device_motion" or "magnetometer"
    """
    source: str
    success: bool = True
    error_kind: Optional[SourceErrorKind] = None
    message: str = ""
    mode: Optional[str] = None

    @classmethod
    def ok(cls, source: str, mode: Optional[str] = None) -> 'SourceStatus':
        return cls(source=source, success=True, mode=mode)

    @classmethod
    def failed(
        cls,
        source: str,
        error_kind: SourceErrorKind,
        message: str
    ) -> 'SourceStatus':
        return cls(source=source, success=False, error_kind=error_kind, message=message)

    @property
    def permission_denied(self) -> bool:
        return self.error_kind is SourceErrorKind.PERMISSION_DENIED

    def __str__(self) -> str:
        if self.success:
            return f"{self.source}: OK" + (f" ({self.mode})" if self.mode else "")
        return f"{self.source}: {self.error_kind.name} - {self.message}"


@dataclass
class InitResult:
    """Combined result of starting the navigation context."""
    location: SourceStatus
    orientation: SourceStatus
    errors: List[str] = field(default_factory=list)

    def __post_init__(self):
        for status in (self.location, self.orientation):
            if not status.success:
                self.errors.append(str(status))

    @property
    def success(self) -> bool:
        return self.location.success and self.orientation.success

    @property
    def location_permission_granted(self) -> bool:
        return not self.location.permission_denied

    @property
    def sensor_active(self) -> bool:
        return self.orientation.success

    @property
    def first_error(self) -> Optional[SourceStatus]:
        """Location failures take precedence, matching start order."""
        for status in (self.location, self.orientation):
            if not status.success:
                return status
        return None
