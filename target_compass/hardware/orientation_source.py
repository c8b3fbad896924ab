"""
Orientation Source
==================

Abstract base class and mock implementation for the device orientation
input. Real platform bindings subclass OrientationSourceBase and push
samples into the callbacks they are given.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class OrientationSample:
    """Fused device rotation in radians."""
    alpha: float   # Rotation around Z (compass heading)
    beta: float    # Rotation around X (pitch)
    gamma: float   # Rotation around Y (roll)

    @classmethod
    def from_degrees(cls, heading: float, pitch: float = 0.0, roll: float = 0.0) -> 'OrientationSample':
        return cls(math.radians(heading), math.radians(pitch), math.radians(roll))


@dataclass
class MagneticSample:
    """Raw magnetometer vector (microtesla)."""
    x: float
    y: float
    z: float = 0.0

    @property
    def strength(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    @classmethod
    def from_heading(cls, heading: float, strength: float = 45.0) -> 'MagneticSample':
        """Vector whose atan2(y, x) equals heading."""
        rad = math.radians(heading)
        return cls(strength * math.cos(rad), strength * math.sin(rad), 0.0)


@dataclass
class SensorAvailability:
    """Which orientation sensors the device reports."""
    magnetometer: bool = False
    gyroscope: bool = False
    accelerometer: bool = False
    device_motion: bool = False

    @property
    def any_heading(self) -> bool:
        """True if heading can be produced by either path."""
        return self.device_motion or self.magnetometer


OrientationCallback = Callable[[OrientationSample], None]
MagneticCallback = Callable[[MagneticSample], None]


class OrientationSourceBase(ABC):
    """
    Abstract base class for orientation hardware.

    Only one of start_device_motion() / start_magnetometer() is active at a
    time; the engine picks which.
    """

    def __init__(self, update_interval: float = 0.1, **kwargs):
        self.update_interval = update_interval
        self._active_mode: Optional[str] = None

    @property
    def active_mode(self) -> Optional[str]:
        """Active input: "device_motion", "magnetometer" or None when stopped."""
        return self._active_mode

    @property
    def is_active(self) -> bool:
        return self._active_mode is not None

    @abstractmethod
    def check_availability(self) -> SensorAvailability:
        """Report available sensors."""
        pass

    @abstractmethod
    def has_permission(self) -> bool:
        """Whether motion sensor access is granted."""
        pass

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask for motion sensor access; returns True if granted."""
        pass

    @abstractmethod
    def start_device_motion(self, callback: OrientationCallback) -> bool:
        """Start delivering fused rotation samples to callback."""
        pass

    @abstractmethod
    def start_magnetometer(self, callback: MagneticCallback) -> bool:
        """Start delivering raw magnetometer samples to callback."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop all sensor listeners."""
        pass

    def set_update_interval(self, interval: float) -> None:
        """Set sample period in seconds."""
        self.update_interval = max(0.0, float(interval))

    def get_device_info(self) -> dict:
        return {
            'update_interval': self.update_interval,
            'active_mode': self._active_mode,
        }


class MockOrientationSource(OrientationSourceBase):
    """
    Mock orientation source for testing without hardware.

    Samples are pushed explicitly with emit_rotation() / emit_magnetic() /
    emit_heading(). Optional Gaussian noise simulates a jittery compass.

    Usage:
        source = MockOrientationSource(device_motion=False)  # compass only
        engine = OrientationFusionEngine(source=source)
        engine.start()
        source.emit_heading(90.0)
    """

    def __init__(
        self,
        device_motion: bool = True,
        magnetometer: bool = True,
        gyroscope: bool = True,
        accelerometer: bool = True,
        permission_granted: bool = True,
        grant_on_request: bool = True,
        fail_on_start: bool = False,
        noise_deg: float = 0.0,
        seed: Optional[int] = None,
        **kwargs
    ):
        """
        Initialize mock orientation source.

        Args:
            device_motion: Report fused rotation as available
            magnetometer: Report magnetometer as available
            gyroscope: Report gyroscope as available
            accelerometer: Report accelerometer as available
            permission_granted: Initial permission state
            grant_on_request: Whether request_permission() grants access
            fail_on_start: Make start_* raise, simulating a driver error
            noise_deg: Std-dev of heading noise added by emit_heading()
            seed: RNG seed for reproducible noise
        """
        super().__init__(**kwargs)
        self.availability = SensorAvailability(
            magnetometer=magnetometer,
            gyroscope=gyroscope,
            accelerometer=accelerometer,
            device_motion=device_motion,
        )
        self.permission_granted = permission_granted
        self.grant_on_request = grant_on_request
        self.fail_on_start = fail_on_start
        self.noise_deg = noise_deg

        self._rng = np.random.default_rng(seed)
        self._motion_callback: Optional[OrientationCallback] = None
        self._magnetic_callback: Optional[MagneticCallback] = None
        self.samples_emitted = 0

    def check_availability(self) -> SensorAvailability:
        return self.availability

    def has_permission(self) -> bool:
        return self.permission_granted

    def request_permission(self) -> bool:
        if self.grant_on_request:
            self.permission_granted = True
        return self.permission_granted

    def start_device_motion(self, callback: OrientationCallback) -> bool:
        if self.fail_on_start:
            raise RuntimeError("Mock device motion driver failure")
        if not self.availability.device_motion:
            return False
        self._motion_callback = callback
        self._active_mode = "device_motion"
        logger.info("Mock device motion started")
        return True

    def start_magnetometer(self, callback: MagneticCallback) -> bool:
        if self.fail_on_start:
            raise RuntimeError("Mock magnetometer driver failure")
        if not self.availability.magnetometer:
            return False
        self._magnetic_callback = callback
        self._active_mode = "magnetometer"
        logger.info("Mock magnetometer started")
        return True

    def stop(self) -> None:
        if self._active_mode is not None:
            logger.info(f"Mock orientation source stopped ({self._active_mode})")
        self._motion_callback = None
        self._magnetic_callback = None
        self._active_mode = None

    # -- Sample injection --
    def emit_rotation(self, sample: OrientationSample) -> bool:
        """Push a fused rotation sample. Returns False if not listening."""
        if self._motion_callback is None:
            return False
        self.samples_emitted += 1
        self._motion_callback(sample)
        return True

    def emit_magnetic(self, sample: MagneticSample) -> bool:
        """Push a magnetometer sample. Returns False if not listening."""
        if self._magnetic_callback is None:
            return False
        self.samples_emitted += 1
        self._magnetic_callback(sample)
        return True

    def emit_heading(self, heading: float, pitch: float = 0.0, roll: float = 0.0) -> bool:
        """Push a heading (degrees) through whichever path is active."""
        if self.noise_deg > 0:
            heading = heading + float(self._rng.normal(0.0, self.noise_deg))
        if self._active_mode == "device_motion":
            return self.emit_rotation(OrientationSample.from_degrees(heading, pitch, roll))
        if self._active_mode == "magnetometer":
            return self.emit_magnetic(MagneticSample.from_heading(heading))
        return False
