"""
Configuration Management
========================

Provides a centralized configuration system with:
- YAML file loading
- Environment variable overrides
- Default values
- Singleton pattern for global access
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class TargetConfig:
    """Fixed navigation target."""
    name: str = "Digantara Industries"
    latitude: float = 13.0453132
    longitude: float = 77.5733936


@dataclass
class FilterConfig:
    """Filter bank configuration."""
    heading_filter: str = "angle"
    heading_alpha: float = 0.2
    tilt_alpha: float = 0.3

    # Kalman settings
    kalman_process_noise: float = 0.01
    kalman_measurement_noise: float = 0.1

    # Complementary / moving average settings
    complementary_alpha: float = 0.98
    moving_average_window: int = 5


@dataclass
class OrientationConfig:
    """Orientation source configuration."""
    update_interval: float = 0.1   # seconds (10 Hz)
    prefer_device_motion: bool = True
    smooth_tilt: bool = False


@dataclass
class LocationConfig:
    """Location source configuration."""
    distance_interval: float = 1.0   # meters
    time_interval: float = 0.5       # seconds
    accuracy: str = "best_for_navigation"
    max_fix_age: float = 1.0         # seconds


@dataclass
class NavigationConfig:
    """Navigation configuration."""
    alignment_threshold: float = 10.0   # degrees


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "logs/target_compass.log"
    max_file_size: int = 10485760
    backup_count: int = 3
    console_enabled: bool = True


class Config:
    """
    Central configuration manager.

    Loads configuration from YAML file with environment variable overrides.
    Uses singleton pattern for global access.

    Usage:
        config = Config.load("config/target_compass.yaml")
        # or
        config = get_config()  # Gets existing instance

        target = (config.target.latitude, config.target.longitude)
        alpha = config.filters.heading_alpha
    """

    _instance: Optional['Config'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if Config._initialized and config_path is None:
            return

        self._raw: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

        # Initialize sub-configs with defaults
        self.target = TargetConfig()
        self.filters = FilterConfig()
        self.orientation = OrientationConfig()
        self.location = LocationConfig()
        self.navigation = NavigationConfig()
        self.logging = LoggingConfig()

        if config_path:
            self._load_file(config_path)
        self._apply_env_overrides()

        Config._initialized = True

    @classmethod
    def load(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        return cls(config_path)

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        global _config
        cls._instance = None
        cls._initialized = False
        _config = None

    def _load_file(self, config_path: str) -> None:
        """Load and parse YAML configuration file."""
        path = Path(config_path)

        # Search for config file in common locations
        search_paths = [
            path,
            Path(__file__).parent.parent.parent / "config" / path.name,
            Path.home() / ".config" / "target_compass" / path.name,
            Path("/etc/target_compass") / path.name,
        ]

        for search_path in search_paths:
            if search_path.exists():
                self._config_path = search_path
                break

        if self._config_path is None or not self._config_path.exists():
            logger.warning(f"Config file not found: {config_path}, using defaults")
            return

        try:
            with open(self._config_path, 'r') as f:
                self._raw = yaml.safe_load(f) or {}
            logger.info(f"Loaded config from: {self._config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config: {e}")
            return

        self._parse_config()

    def _parse_config(self) -> None:
        """Parse raw config into typed dataclasses."""
        # Target
        if 'target' in self._raw:
            t = self._raw['target']
            self.target = TargetConfig(
                name=t.get('name', 'Digantara Industries'),
                latitude=float(t.get('latitude', 13.0453132)),
                longitude=float(t.get('longitude', 77.5733936)),
            )

        # Filters
        if 'filters' in self._raw:
            f = self._raw['filters']
            kalman = f.get('kalman', {})
            self.filters = FilterConfig(
                heading_filter=f.get('heading_filter', 'angle'),
                heading_alpha=f.get('heading_alpha', 0.2),
                tilt_alpha=f.get('tilt_alpha', 0.3),
                kalman_process_noise=kalman.get('process_noise', 0.01),
                kalman_measurement_noise=kalman.get('measurement_noise', 0.1),
                complementary_alpha=f.get('complementary', {}).get('alpha', 0.98),
                moving_average_window=f.get('moving_average', {}).get('window_size', 5),
            )

        # Orientation
        if 'orientation' in self._raw:
            o = self._raw['orientation']
            self.orientation = OrientationConfig(
                update_interval=o.get('update_interval', 0.1),
                prefer_device_motion=o.get('prefer_device_motion', True),
                smooth_tilt=o.get('smooth_tilt', False),
            )

        # Location
        if 'location' in self._raw:
            loc = self._raw['location']
            self.location = LocationConfig(
                distance_interval=loc.get('distance_interval', 1.0),
                time_interval=loc.get('time_interval', 0.5),
                accuracy=loc.get('accuracy', 'best_for_navigation'),
                max_fix_age=loc.get('max_fix_age', 1.0),
            )

        # Navigation
        if 'navigation' in self._raw:
            n = self._raw['navigation']
            self.navigation = NavigationConfig(
                alignment_threshold=n.get('alignment_threshold', 10.0),
            )

        # Logging
        if 'logging' in self._raw:
            log = self._raw['logging']
            self.logging = LoggingConfig(
                level=log.get('level', 'INFO'),
                file_enabled=log.get('file_enabled', False),
                file_path=log.get('file_path', 'logs/target_compass.log'),
                max_file_size=log.get('max_file_size', 10485760),
                backup_count=log.get('backup_count', 3),
                console_enabled=log.get('console_enabled', True),
            )

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        # Target
        if os.environ.get('TC_TARGET_LAT'):
            self.target.latitude = float(os.environ['TC_TARGET_LAT'])
        if os.environ.get('TC_TARGET_LON'):
            self.target.longitude = float(os.environ['TC_TARGET_LON'])

        # Filters
        if os.environ.get('TC_HEADING_FILTER'):
            self.filters.heading_filter = os.environ['TC_HEADING_FILTER']
        if os.environ.get('TC_HEADING_ALPHA'):
            self.filters.heading_alpha = float(os.environ['TC_HEADING_ALPHA'])

        # Navigation
        if os.environ.get('TC_ALIGNMENT_THRESHOLD'):
            self.navigation.alignment_threshold = float(os.environ['TC_ALIGNMENT_THRESHOLD'])

        # Logging
        if os.environ.get('TC_LOG_LEVEL'):
            self.logging.level = os.environ['TC_LOG_LEVEL']

    def get(self, key: str, default: Any = None) -> Any:
        """Get raw config value by dot-notation key."""
        keys = key.split('.')
        value = self._raw
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def __repr__(self) -> str:
        return (
            f"Config(path={self._config_path}, "
            f"target=({self.target.latitude}, {self.target.longitude}))"
        )


# Global config accessor
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(config_path: str) -> Config:
    """Load configuration from file and set as global."""
    global _config
    _config = Config.load(config_path)
    return _config
