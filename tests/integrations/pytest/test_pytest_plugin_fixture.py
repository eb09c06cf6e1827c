from __future__ import annotations

from collections.abc import Iterator

import pytest

from scoped_consumer import Provider, ScopedConsumer

pytest_plugins = ["scoped_consumer.integrations.pytest_plugin"]

_disposed: list[ScopedConsumer] = []


@pytest.fixture()
def tracked_scope(scoped_consumer: ScopedConsumer) -> Iterator[ScopedConsumer]:
    yield scoped_consumer
    _disposed.append(scoped_consumer)


def test_fixture_provides_mounted_root_scope(scoped_consumer: ScopedConsumer) -> None:
    assert isinstance(scoped_consumer, ScopedConsumer)
    assert scoped_consumer.mounted
    assert scoped_consumer.parent is None


def test_fixture_state_is_isolated_per_test(scoped_consumer: ScopedConsumer) -> None:
    provider = Provider(lambda _ref: object())

    assert scoped_consumer.read(provider) is scoped_consumer.read(provider)


def test_fixture_scope_is_disposed_at_teardown(tracked_scope: ScopedConsumer) -> None:
    tracked_scope.child()
    assert tracked_scope.mounted


def test_previous_fixture_scope_was_disposed() -> None:
    assert _disposed
    assert not _disposed[-1].mounted


def test_explicit_dispose_inside_test_is_allowed(scoped_consumer: ScopedConsumer) -> None:
    scoped_consumer.dispose()

    assert not scoped_consumer.mounted
