"""Notifier-backed counter shared through a scope.

This module covers:

1. Listening directly on a notifier with ``add_listener``.
2. Listening through the scope with ``listen``.
3. Removing a direct listener while the scope listener stays active.
4. Disposing the scope, which removes scope listeners.
5. Remounting the scope (test helper) keeps the cached counter.
"""

from __future__ import annotations

from scoped_consumer import Notifier, Provider, ScopedConsumer
from scoped_consumer.testing import remount


class Counter(Notifier[int]):
    def build(self) -> int:
        return 0

    def increment(self) -> None:
        self.state += 1

    def decrement(self) -> None:
        self.state -= 1


counter_provider = Provider(lambda _ref: Counter(), debug_label="counter")


def main() -> None:
    scope = ScopedConsumer()

    direct_updates: list[int] = []
    remove_direct = scope.read(counter_provider).add_listener(direct_updates.append)

    scoped_updates: list[tuple[int | None, int]] = []
    scope.listen(counter_provider, lambda old, new: scoped_updates.append((old, new)))

    scope.read(counter_provider).increment()
    scope.read(counter_provider).increment()
    scope.read(counter_provider).decrement()
    print(f"direct_updates={direct_updates}")  # => direct_updates=[1, 2, 1]

    remove_direct()
    scope.read(counter_provider).increment()
    scope.read(counter_provider).increment()
    print(f"count={scope.read(counter_provider).state}")  # => count=3
    print(f"direct_updates_after_remove={direct_updates}")  # => direct_updates_after_remove=[1, 2, 1]
    print(
        f"scoped_updates={scoped_updates}",
    )  # => scoped_updates=[(0, 1), (1, 2), (2, 1), (1, 2), (2, 3)]

    scope.dispose()
    remount(scope)
    scope.read(counter_provider).increment()
    scope.read(counter_provider).increment()
    print(f"count_after_remount={scope.read(counter_provider).state}")  # => count_after_remount=5
    print(f"scoped_updates_after_dispose={len(scoped_updates)}")  # => scoped_updates_after_dispose=5


if __name__ == "__main__":
    main()
