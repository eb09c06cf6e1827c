"""Shared pytest fixtures for scoped_consumer tests."""

from collections.abc import Iterator

import pytest

from scoped_consumer import Notifier, Provider, ScopedConsumer


class Counter(Notifier[int]):
    """Counter notifier used across test modules."""

    def build(self) -> int:
        return 0

    def increment(self) -> None:
        self.state += 1

    def decrement(self) -> None:
        self.state -= 1


@pytest.fixture()
def scope() -> Iterator[ScopedConsumer]:
    """Root scope disposed after the test."""
    root = ScopedConsumer(debug_label="root")
    yield root
    root.dispose()


@pytest.fixture()
def counter_provider() -> Provider[Counter]:
    """Fresh counter provider, so cached state never leaks between tests."""
    return Provider(lambda _ref: Counter(), debug_label="counter")
