"""Test-only helpers.

Nothing in this module is meant for production code paths.
"""

from __future__ import annotations

from scoped_consumer._internal.consumer import ScopedConsumer


def remount(consumer: ScopedConsumer) -> None:
    """Reactivate a disposed scope, keeping everything it had cached.

    The registry, cached slot values and dispose callbacks are left as they
    were, so reads after remounting see the pre-dispose state instead of
    rebuilding it. Child scopes disposed together with ``consumer`` stay
    disposed, and subscriptions removed during disposal are not restored.

    Args:
        consumer: Scope to reactivate. Remounting an active scope is a no-op.

    """
    if consumer.mounted:
        return
    consumer._remount()  # noqa: SLF001
