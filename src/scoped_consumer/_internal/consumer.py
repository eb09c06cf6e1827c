from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any, TypeVar, cast

from typing_extensions import Self

from scoped_consumer._internal.notifier import Notifier, VoidCallback
from scoped_consumer._internal.providers import Provider, ProviderSlot
from scoped_consumer._internal.ref import Ref
from scoped_consumer.exceptions import ScopedConsumerUseAfterDisposeError

T = TypeVar("T")
STATE = TypeVar("STATE")

ListenerChangeCallback = Callable[[STATE | None, STATE], None]
"""Callback receiving ``(old_state, new_state)`` for scope-level listeners."""

logger = logging.getLogger(__name__)


class ScopedConsumer:
    """Own cached provider state for one node of a scope tree.

    Reading a provider looks for its state in this scope first and then in
    each ancestor. When no scope in the chain has seen the provider, the scope
    that was asked becomes its owner: the factory runs once with a ``Ref``
    bound to that scope and the result is cached there. Descendants of the
    owner share the cached value; siblings and unrelated trees do not.

    Disposing a scope runs its dispose callbacks in registration order,
    which includes disposing every child created with ``child()``, and then
    marks the scope unmounted. Any later ``read``, ``invalidate``, ``listen``,
    ``on_dispose`` or ``child`` call raises
    ``ScopedConsumerUseAfterDisposeError``.

    Scopes are context managers; leaving a ``with`` or ``async with`` block
    disposes the scope.

    Examples:
        .. code-block:: python

            root = ScopedConsumer()
            with root.child() as request:
                request.read(session_provider)

    """

    def __init__(
        self,
        parent: ScopedConsumer | None = None,
        *,
        debug_label: str | None = None,
    ) -> None:
        """Create an active scope.

        Args:
            parent: Enclosing scope consulted when this scope has no state for
                a provider. Passing a parent here does not tie this scope's
                disposal to the parent; use ``parent.child()`` for that.
            debug_label: Optional label used in ``repr()`` and log output only.

        """
        self._parent = parent
        self._debug_label = debug_label
        self._registry: dict[Provider[Any], ProviderSlot] = {}
        self._slots: dict[ProviderSlot, Any] = {}
        self._dispose_callbacks: list[VoidCallback] = []
        self._mounted = True
        self._disposing = False
        self._attached_to_parent = False

    @property
    def parent(self) -> ScopedConsumer | None:
        return self._parent

    @property
    def mounted(self) -> bool:
        """``False`` once ``dispose()`` has run."""
        return self._mounted

    def read(self, provider: Provider[T]) -> T:
        """Return the state of ``provider``, creating it on first use.

        Args:
            provider: Provider to resolve.

        Returns:
            The cached value. Repeated reads from this scope or any descendant
            return the same object until the provider is invalidated.

        Raises:
            ScopedConsumerUseAfterDisposeError: If this scope, or an ancestor
                consulted during the lookup, has been disposed.

        """
        self._ensure_mounted("read")
        owner, slot = self._resolve_slot(provider, "read")
        if slot not in owner._slots:
            owner._slots[slot] = provider.create(Ref(owner, provider))
            logger.debug("Created state for %r in %r (slot %d)", provider, owner, slot)
        return cast("T", owner._slots[slot])

    def invalidate(self, provider: Provider[Any]) -> None:
        """Drop the cached state of ``provider`` so the next read rebuilds it.

        The slot is resolved exactly as ``read`` would resolve it, so
        invalidating a provider nobody has read yet makes this scope its
        owner. Listeners attached to the dropped value are not notified.

        Raises:
            ScopedConsumerUseAfterDisposeError: If this scope, or an ancestor
                consulted during the lookup, has been disposed.

        """
        self._ensure_mounted("invalidate")
        owner, slot = self._resolve_slot(provider, "invalidate")
        if slot in owner._slots:
            del owner._slots[slot]
            logger.debug("Invalidated state for %r in %r (slot %d)", provider, owner, slot)

    def listen(
        self,
        provider: Provider[Notifier[STATE]],
        on_change: ListenerChangeCallback[STATE],
        *,
        fire_immediately: bool = False,
    ) -> VoidCallback:
        """Call ``on_change(old, new)`` whenever the provider's notifier changes.

        The subscription belongs to this scope, not to the scope owning the
        notifier: it is removed when this scope is disposed.

        Args:
            provider: Provider whose state is a ``Notifier``.
            on_change: Callback receiving the previously observed state and the
                new one.
            fire_immediately: Call ``on_change(None, current_state)`` before
                returning.

        Returns:
            A callable removing the subscription early. It also drops the
            dispose callback registered for it.

        Raises:
            ScopedConsumerUseAfterDisposeError: If this scope has been disposed.

        """
        self._ensure_mounted("listen")
        notifier = self.read(provider)
        previous = notifier.state

        def listener(value: STATE) -> None:
            nonlocal previous
            old_value, previous = previous, value
            on_change(old_value, value)

        remove_notifier_listener = notifier.add_listener(listener)

        def remove_listener() -> None:
            remove_notifier_listener()
            self._discard_dispose_callback(remove_listener)

        self.on_dispose(remove_listener)
        if fire_immediately:
            on_change(None, previous)
        return remove_listener

    def on_dispose(self, callback: VoidCallback) -> None:
        """Register ``callback`` to run once when this scope is disposed.

        Raises:
            ScopedConsumerUseAfterDisposeError: If this scope has been disposed.

        """
        self._ensure_mounted("on_dispose")
        self._dispose_callbacks.append(callback)

    def child(self, *, debug_label: str | None = None) -> ScopedConsumer:
        """Create a nested scope that is disposed together with this one.

        Raises:
            ScopedConsumerUseAfterDisposeError: If this scope has been disposed.

        """
        self._ensure_mounted("child")
        child = ScopedConsumer(self, debug_label=debug_label)
        child._attached_to_parent = True
        self._dispose_callbacks.append(child.dispose)
        logger.debug("Created child scope %r of %r", child, self)
        return child

    def dispose(self) -> None:
        """Run dispose callbacks in registration order and unmount the scope.

        Calling ``dispose`` on an already disposed scope, or from a callback
        while this scope is being disposed, does nothing. An exception raised
        by a callback propagates immediately; the remaining callbacks do not
        run and the scope stays mounted.

        A child created with ``child()`` that is disposed on its own removes
        itself from its parent, so the parent does not keep it alive.
        """
        if not self._mounted or self._disposing:
            return
        self._disposing = True
        try:
            # Callbacks appended while this loop runs are picked up by the same pass.
            for callback in self._dispose_callbacks:
                callback()
        finally:
            self._disposing = False
        self._mounted = False
        if self._attached_to_parent and self._parent is not None:
            self._parent._discard_dispose_callback(self.dispose)
        logger.debug(
            "Disposed %r after running %d dispose callbacks",
            self,
            len(self._dispose_callbacks),
        )

    async def run(self, callback: Callable[[ScopedConsumer], Awaitable[None]]) -> None:
        """Await ``callback`` with a fresh child scope, then dispose the child.

        The child is disposed whether the callback returns, raises or is
        cancelled. Exceptions propagate unchanged. Does nothing when this scope
        has already been disposed.

        Args:
            callback: Coroutine function receiving the child scope.

        """
        if not self._mounted:
            return
        async with self.child() as consumer:
            await callback(consumer)

    def _remount(self) -> None:
        self._mounted = True
        logger.debug("Remounted %r with %d cached slots", self, len(self._slots))

    def _discard_dispose_callback(self, callback: VoidCallback) -> None:
        # Removing entries mid-dispose would shift the list under the running loop.
        if not self._disposing and callback in self._dispose_callbacks:
            self._dispose_callbacks.remove(callback)

    def _ensure_mounted(self, operation: str) -> None:
        if not self._mounted:
            raise ScopedConsumerUseAfterDisposeError(operation)

    def _find_owner(self, provider: Provider[Any], operation: str) -> ScopedConsumer | None:
        consumer: ScopedConsumer | None = self
        while consumer is not None:
            if not consumer._mounted:
                raise ScopedConsumerUseAfterDisposeError(operation)
            if provider in consumer._registry:
                return consumer
            consumer = consumer._parent
        return None

    def _resolve_slot(
        self,
        provider: Provider[Any],
        operation: str,
    ) -> tuple[ScopedConsumer, ProviderSlot]:
        owner = self._find_owner(provider, operation)
        if owner is None:
            owner = self
            owner._registry[provider] = len(owner._registry)
        return owner, owner._registry[provider]

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.dispose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.dispose()

    def __repr__(self) -> str:
        label = f"{self._debug_label!r}, " if self._debug_label is not None else ""
        return f"ScopedConsumer({label}mounted={self._mounted})"
