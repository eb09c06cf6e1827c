"""Async work inside a short-lived child scope.

This module covers:

1. ``run`` hands a fresh child scope to a coroutine function.
2. The child is disposed after the coroutine finishes.
3. The child is disposed even when the coroutine raises.
4. ``async with`` on a child scope behaves the same way.
"""

from __future__ import annotations

import asyncio

from scoped_consumer import Provider, Ref, ScopedConsumer

events: list[str] = []


class Connection:
    def __init__(self, ref: Ref) -> None:
        events.append("open")
        ref.on_dispose(lambda: events.append("close"))


connection_provider = Provider(Connection, debug_label="connection")


async def main() -> None:
    root = ScopedConsumer()
    seen: list[ScopedConsumer] = []

    async def handle(scope: ScopedConsumer) -> None:
        seen.append(scope)
        scope.read(connection_provider)
        await asyncio.sleep(0)

    await root.run(handle)
    print(f"events={events}")  # => events=['open', 'close']
    print(f"child_mounted_after_run={seen[0].mounted}")  # => child_mounted_after_run=False

    async def fail(scope: ScopedConsumer) -> None:
        seen.append(scope)
        scope.read(connection_provider)
        msg = "boom"
        raise RuntimeError(msg)

    try:
        await root.run(fail)
    except RuntimeError as error:
        error_message = str(error)
    print(f"error={error_message}")  # => error=boom
    print(f"child_mounted_after_error={seen[1].mounted}")  # => child_mounted_after_error=False

    async with root.child() as request:
        request.read(connection_provider)
    print(f"events_after_async_with={len(events)}")  # => events_after_async_with=6

    root.dispose()


if __name__ == "__main__":
    asyncio.run(main())
