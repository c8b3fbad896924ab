"""
Subscription Tests
==================

Unit tests for the subscriber registry.
"""

import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from target_compass.core.subscriptions import SubscriberRegistry, Subscription


class TestSubscriberRegistry:
    """Test SubscriberRegistry fan-out."""

    def test_registration_order(self):
        """Test callbacks run in registration order."""
        registry = SubscriberRegistry("test")
        calls = []
        registry.subscribe(lambda x: calls.append(("a", x)))
        registry.subscribe(lambda x: calls.append(("b", x)))

        assert registry.publish(1) == 2
        assert calls == [("a", 1), ("b", 1)]

    def test_same_callback_twice(self):
        """Test the same function can be registered and removed independently."""
        registry = SubscriberRegistry("test")
        calls = []
        sub1 = registry.subscribe(calls.append)
        registry.subscribe(calls.append)

        registry.publish("x")
        assert calls == ["x", "x"]

        sub1.unsubscribe()
        registry.publish("y")
        assert calls == ["x", "x", "y"]
        assert len(registry) == 1

    def test_unsubscribe_idempotent(self):
        """Test unsubscribe twice is a no-op."""
        registry = SubscriberRegistry("test")
        sub = registry.subscribe(lambda: None)
        sub.unsubscribe()
        sub.unsubscribe()
        assert not sub.active
        assert len(registry) == 0

    def test_callable_handle(self):
        """Test calling the handle unsubscribes."""
        registry = SubscriberRegistry("test")
        sub = registry.subscribe(lambda: None)
        assert isinstance(sub, Subscription)
        assert sub.active
        sub()
        assert not sub.active

    def test_raising_callback_isolated(self):
        """Test a failing callback does not block the others."""
        registry = SubscriberRegistry("test")
        received = []

        def broken(value):
            raise RuntimeError("boom")

        registry.subscribe(broken)
        registry.subscribe(received.append)

        assert registry.publish(7) == 1
        assert received == [7]
        assert registry.callback_errors == 1

    def test_unsubscribe_during_publish(self):
        """Test removing a subscriber from inside a callback."""
        registry = SubscriberRegistry("test")
        calls = []
        holder = {}

        def first(value):
            calls.append("first")
            holder['second'].unsubscribe()

        registry.subscribe(first)
        holder['second'] = registry.subscribe(lambda v: calls.append("second"))

        registry.publish(0)
        registry.publish(0)
        # Snapshot taken before fan-out, so second still runs once
        assert calls == ["first", "second", "first"]

    def test_rejects_non_callable(self):
        """Test subscribe() type check."""
        registry = SubscriberRegistry("test")
        with pytest.raises(TypeError):
            registry.subscribe(42)

    def test_clear(self):
        """Test clear() deactivates every handle."""
        registry = SubscriberRegistry("test")
        subs = [registry.subscribe(lambda: None) for _ in range(3)]
        registry.clear()
        assert len(registry) == 0
        assert not any(s.active for s in subs)

    def test_tokens_unique(self):
        """Test tokens are never reused."""
        registry = SubscriberRegistry("test")
        a = registry.subscribe(lambda: None)
        a.unsubscribe()
        b = registry.subscribe(lambda: None)
        assert a.token != b.token


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
