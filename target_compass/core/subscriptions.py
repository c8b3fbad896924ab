"""
Subscriber Registry
===================

Publish-subscribe plumbing shared by the orientation engine, the location
tracker and the navigation aggregator.

Each subscription is keyed by a stable integer token rather than by the
callback itself, so the same function may be registered twice and each
registration is removed independently.
"""

import itertools
import logging
import threading
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class Subscription:
    """
    Unregister capability returned by SubscriberRegistry.subscribe().

    Usage:
        sub = registry.subscribe(on_update)
        ...
        sub.unsubscribe()   # or simply sub()
    """

    def __init__(self, registry: 'SubscriberRegistry', token: int):
        self._registry: Optional['SubscriberRegistry'] = registry
        self._token = token

    @property
    def token(self) -> int:
        return self._token

    @property
    def active(self) -> bool:
        """True until unsubscribe() is called or the registry is cleared."""
        return self._registry is not None and self._registry.contains(self._token)

    def unsubscribe(self) -> None:
        """Remove this subscription. Calling again is a no-op."""
        registry = self._registry
        if registry is None:
            return
        self._registry = None
        registry._remove(self._token)

    __call__ = unsubscribe

    def __repr__(self) -> str:
        return f"Subscription(token={self._token}, active={self.active})"


class SubscriberRegistry:
    """
    Ordered set of callbacks with synchronous fan-out.

    Callbacks run in registration order. A callback that raises is logged and
    skipped; the remaining callbacks still receive the update.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._callbacks: Dict[int, Callable[..., None]] = {}
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()
        self.callback_errors = 0

    def subscribe(self, callback: Callable[..., None]) -> Subscription:
        """Register a callback and return its unregister handle."""
        if not callable(callback):
            raise TypeError(f"{callback!r} is not callable")
        with self._lock:
            token = next(self._tokens)
            self._callbacks[token] = callback
        logger.debug(f"[{self.name}] subscriber {token} registered")
        return Subscription(self, token)

    def _remove(self, token: int) -> bool:
        with self._lock:
            removed = self._callbacks.pop(token, None) is not None
        if removed:
            logger.debug(f"[{self.name}] subscriber {token} removed")
        return removed

    def contains(self, token: int) -> bool:
        with self._lock:
            return token in self._callbacks

    def publish(self, *args) -> int:
        """
        Deliver args to every subscriber.

        Returns:
            Number of callbacks that completed without raising
        """
        with self._lock:
            callbacks: List[Callable[..., None]] = list(self._callbacks.values())

        delivered = 0
        for callback in callbacks:
            try:
                callback(*args)
                delivered += 1
            except Exception as e:
                self.callback_errors += 1
                logger.error(f"[{self.name}] subscriber callback error: {e}")
        return delivered

    def clear(self) -> None:
        """Drop every subscription."""
        with self._lock:
            self._callbacks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def __repr__(self) -> str:
        return f"SubscriberRegistry({self.name}, subscribers={len(self)})"
