"""
Core Module
===========

Contains core functionality shared across the navigation engine:
- Configuration management
- Logging setup
- Subscriber registry
- Source status / error taxonomy
"""

from .config import Config, get_config, load_config
from .logging_setup import setup_logging
from .subscriptions import SubscriberRegistry, Subscription
from .status import SourceErrorKind, SourceStatus, InitResult

__all__ = [
    'Config',
    'get_config',
    'load_config',
    'setup_logging',
    'SubscriberRegistry',
    'Subscription',
    'SourceErrorKind',
    'SourceStatus',
    'InitResult',
]
