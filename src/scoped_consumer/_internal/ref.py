from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from scoped_consumer._internal.consumer import ListenerChangeCallback, ScopedConsumer
    from scoped_consumer._internal.notifier import Notifier, VoidCallback
    from scoped_consumer._internal.providers import Provider

T = TypeVar("T")
STATE = TypeVar("STATE")


class Ref:
    """Resolution and cleanup capability handed to a provider factory.

    A ref is bound to the scope that owns the state being created, so
    providers read through it are resolved from that scope (and its
    ancestors), and cleanup registered through it runs when that scope is
    disposed rather than when the created value goes away.
    """

    __slots__ = ("_provider", "_scope")

    def __init__(self, scope: ScopedConsumer, provider: Provider[Any]) -> None:
        self._scope = scope
        self._provider = provider

    @property
    def scope(self) -> ScopedConsumer:
        """Scope that owns the state of ``provider``."""
        return self._scope

    @property
    def provider(self) -> Provider[Any]:
        """Provider whose factory received this ref."""
        return self._provider

    def read(self, provider: Provider[T]) -> T:
        return self._scope.read(provider)

    def listen(
        self,
        provider: Provider[Notifier[STATE]],
        on_change: ListenerChangeCallback[STATE],
        *,
        fire_immediately: bool = False,
    ) -> VoidCallback:
        return self._scope.listen(provider, on_change, fire_immediately=fire_immediately)

    def on_dispose(self, callback: VoidCallback) -> None:
        self._scope.on_dispose(callback)

    def __repr__(self) -> str:
        return f"Ref({self._provider!r}, scope={self._scope!r})"
