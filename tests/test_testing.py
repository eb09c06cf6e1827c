"""Tests for the opt-in remount helper."""

from __future__ import annotations

from scoped_consumer import Provider, ScopedConsumer
from scoped_consumer.testing import remount


def test_remount_reactivates_disposed_scope() -> None:
    scope = ScopedConsumer()
    scope.dispose()

    remount(scope)

    assert scope.mounted


def test_remount_keeps_cached_state() -> None:
    calls: list[int] = []
    provider = Provider(lambda _ref: calls.append(1) or object())
    scope = ScopedConsumer()
    before = scope.read(provider)
    scope.dispose()

    remount(scope)

    assert scope.read(provider) is before
    assert calls == [1]


def test_remount_does_not_revive_children() -> None:
    scope = ScopedConsumer()
    child = scope.child()
    scope.dispose()

    remount(scope)

    assert not child.mounted


def test_remount_active_scope_is_noop() -> None:
    scope = ScopedConsumer()
    callbacks: list[str] = []
    scope.on_dispose(lambda: callbacks.append("disposed"))

    remount(scope)
    scope.dispose()

    assert callbacks == ["disposed"]


def test_dispose_after_remount_reruns_kept_callbacks() -> None:
    """Dispose callbacks survive a remount and run again on the next dispose."""
    scope = ScopedConsumer()
    callbacks: list[str] = []
    scope.on_dispose(lambda: callbacks.append("disposed"))
    scope.dispose()

    remount(scope)
    scope.dispose()

    assert callbacks == ["disposed", "disposed"]
