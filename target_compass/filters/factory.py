"""
Filter Factory
==============

Factory pattern implementation for creating filters based on configuration.
"""

import logging
from typing import Any, Dict, Optional, Type

from .base import FilterBase
from .low_pass import LowPassFilter
from .angle_filter import AngleFilter
from .kalman import KalmanFilter
from .complementary import ComplementaryFilter
from .moving_average import MovingAverageFilter

logger = logging.getLogger(__name__)


class FilterFactory:
    """
    Factory for creating filter instances.

    Usage:
        # Create from config
        from target_compass.core import get_config
        heading_filter = FilterFactory.create_from_config(get_config().filters)

        # Create by type
        f = FilterFactory.create("kalman", process_noise=0.02)

        # Register custom filter
        FilterFactory.register("median", MedianFilter)
    """

    # Registry of filter types
    _registry: Dict[str, Type[FilterBase]] = {
        'low_pass': LowPassFilter,
        'angle': AngleFilter,
        'kalman': KalmanFilter,
        'complementary': ComplementaryFilter,
        'moving_average': MovingAverageFilter,
    }

    # Aliases for convenience
    _aliases: Dict[str, str] = {
        'lowpass': 'low_pass',
        'ema': 'low_pass',
        'exponential': 'low_pass',
        'circular': 'angle',
        'angular': 'angle',
        'heading': 'angle',
        'kf': 'kalman',
        'comp': 'complementary',
        'sma': 'moving_average',
        'window': 'moving_average',
    }

    # Filters that average correctly across the 0/360 wrap
    _angle_safe = {'angle'}

    @classmethod
    def register(cls, name: str, filter_class: Type[FilterBase], angle_safe: bool = False) -> None:
        """
        Register a new filter type.

        Args:
            name: Unique name for the filter type
            filter_class: Filter class (must inherit from FilterBase)
            angle_safe: Whether the filter handles the 0/360 boundary
        """
        if not issubclass(filter_class, FilterBase):
            raise TypeError(f"{filter_class} must inherit from FilterBase")

        cls._registry[name] = filter_class
        if angle_safe:
            cls._angle_safe.add(name)
        logger.info(f"Registered filter type: {name}")

    @classmethod
    def unregister(cls, name: str) -> None:
        """Unregister a filter type."""
        if name in cls._registry:
            del cls._registry[name]
        cls._angle_safe.discard(name)

    @classmethod
    def get_available_types(cls) -> list:
        """Get list of available filter types."""
        return list(cls._registry.keys())

    @classmethod
    def _resolve_type(cls, filter_type: str) -> str:
        """Resolve type name including aliases."""
        filter_type = filter_type.lower().strip()
        return cls._aliases.get(filter_type, filter_type)

    @classmethod
    def is_angle_safe(cls, filter_type: str) -> bool:
        return cls._resolve_type(filter_type) in cls._angle_safe

    @classmethod
    def create(cls, filter_type: str, **kwargs) -> FilterBase:
        """
        Create a filter instance.

        Args:
            filter_type: Type of filter ("low_pass", "angle", "kalman", ...)
            **kwargs: Additional arguments passed to filter constructor

        Raises:
            ValueError: If filter type is not registered
        """
        resolved_type = cls._resolve_type(filter_type)

        if resolved_type not in cls._registry:
            available = ', '.join(cls._registry.keys())
            raise ValueError(
                f"Unknown filter type: '{filter_type}'. "
                f"Available types: {available}"
            )

        filter_class = cls._registry[resolved_type]
        logger.debug(f"Creating filter: {filter_class.__name__}")

        return filter_class(**kwargs)

    @classmethod
    def create_from_config(cls, filter_config: Any, filter_type: Optional[str] = None) -> FilterBase:
        """
        Create a filter from a FilterConfig section.

        Args:
            filter_config: FilterConfig with alpha / noise / window settings
            filter_type: Override type (defaults to filter_config.heading_filter)
        """
        filter_type = filter_type or filter_config.heading_filter
        resolved_type = cls._resolve_type(filter_type)

        kwargs: Dict[str, Any] = {}
        if resolved_type in ('low_pass', 'angle'):
            kwargs['alpha'] = filter_config.heading_alpha
        elif resolved_type == 'kalman':
            kwargs.update({
                'process_noise': filter_config.kalman_process_noise,
                'measurement_noise': filter_config.kalman_measurement_noise,
            })
        elif resolved_type == 'complementary':
            kwargs['alpha'] = filter_config.complementary_alpha
        elif resolved_type == 'moving_average':
            kwargs['window_size'] = filter_config.moving_average_window

        return cls.create(resolved_type, **kwargs)


# Convenience function
def create_filter(filter_type: str = "angle", config: Any = None, **kwargs) -> FilterBase:
    """
    Convenience function to create a filter.

    Args:
        filter_type: Type of filter (ignored if config provided)
        config: Config object or FilterConfig section (optional)
        **kwargs: Additional arguments for the filter

    Examples:
        heading_filter = create_filter("angle", alpha=0.2)
        heading_filter = create_filter(config=get_config())
    """
    if config is not None:
        filter_config = getattr(config, 'filters', config)
        return FilterFactory.create_from_config(filter_config)
    return FilterFactory.create(filter_type, **kwargs)
