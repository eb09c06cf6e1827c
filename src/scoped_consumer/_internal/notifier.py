from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

STATE = TypeVar("STATE")

ValueChanged = Callable[[STATE], None]
"""Listener invoked with the new state after a notifying change."""

VoidCallback = Callable[[], None]
"""Zero-argument callback, used for unsubscribe and dispose hooks."""

_PRIMITIVE_TYPES: tuple[type[Any], ...] = (int, float, complex, str, bytes, bool, type(None))


def _is_primitive(value: object) -> bool:
    return isinstance(value, _PRIMITIVE_TYPES)


class Notifier(ABC, Generic[STATE]):
    """Hold a lazily built, observable piece of state.

    Subclasses implement ``build`` to produce the initial value. The value is
    computed on the first ``state`` read and cached. Assigning ``state`` stores
    the new value and, when ``update_should_notify`` agrees, calls every
    listener with it in registration order.

    A notifier knows nothing about scopes. It is usually returned from a
    provider factory so that a ``ScopedConsumer`` can cache and share it.

    Examples:
        .. code-block:: python

            class Counter(Notifier[int]):
                def build(self) -> int:
                    return 0

                def increment(self) -> None:
                    self.state += 1

    """

    def __init__(self) -> None:
        self._listeners: list[ValueChanged[STATE]] = []
        self._internal_state: STATE | None = None
        self._initialized = False

    @abstractmethod
    def build(self) -> STATE:
        """Return the initial state. Called at most once, on first read."""

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def state(self) -> STATE:
        if not self._initialized:
            self._internal_state = self.build()
            self._initialized = True
        return self._internal_state  # type: ignore[return-value]

    @state.setter
    def state(self, state: STATE) -> None:
        old_state = self._internal_state
        self._internal_state = state
        self._initialized = True
        if self.update_should_notify(old_state, state):
            self._notify_listeners()

    def update_should_notify(self, old_state: STATE | None, new_state: STATE) -> bool:
        """Decide whether an assignment to ``state`` notifies listeners.

        Primitive values (numbers, strings, bytes, booleans and ``None``) are
        compared by type and value, so ``1`` to ``True`` or ``1`` to ``1.0``
        notifies. Anything else is compared by identity, so mutating a list in
        place and assigning it back does not notify. Override to change the
        policy.

        Args:
            old_state: Value held before the assignment, ``None`` if the
                notifier was never initialized.
            new_state: Value being assigned.

        Returns:
            ``True`` when listeners should be called.

        """
        if _is_primitive(old_state) and _is_primitive(new_state):
            return type(old_state) is not type(new_state) or old_state != new_state
        return old_state is not new_state

    def add_listener(
        self,
        listener: ValueChanged[STATE],
        *,
        fire_immediately: bool = False,
    ) -> VoidCallback:
        """Subscribe ``listener`` to state changes.

        Registering the same listener twice keeps a single subscription.

        Args:
            listener: Callable receiving the new state.
            fire_immediately: Call ``listener`` once right away with the
                current state (building it if needed).

        Returns:
            A callable that removes the listener. Calling it more than once
            is a no-op.

        """
        if listener not in self._listeners:
            self._listeners.append(listener)
        if fire_immediately:
            listener(self.state)

        def remove_listener() -> None:
            self.remove_listener(listener)

        return remove_listener

    def remove_listener(self, listener: ValueChanged[STATE]) -> None:
        """Remove ``listener`` if it is subscribed."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self) -> None:
        state = self.state
        for listener in tuple(self._listeners):
            listener(state)
