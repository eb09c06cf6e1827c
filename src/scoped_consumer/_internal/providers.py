from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from scoped_consumer._internal.ref import Ref

T_co = TypeVar("T_co", covariant=True)

ProviderSlot = int
"""A scope-local slot number assigned to each provider the scope owns."""


@dataclass(frozen=True, eq=False, slots=True)
class Provider(Generic[T_co]):
    """Describe how to lazily create one piece of scoped state.

    A provider is a capability token: it carries no state of its own and is
    compared and hashed by identity, so two providers built from the same
    factory are still distinct keys. The same instance may be read from any
    number of unrelated scope trees.

    The factory receives a ``Ref`` bound to the scope that ends up owning the
    state. Use it to read other providers or to register cleanup.

    Examples:
        .. code-block:: python

            counter_provider = Provider(lambda ref: Counter(), debug_label="counter")

            scope = ScopedConsumer()
            scope.read(counter_provider).increment()

    """

    factory: Callable[[Ref], T_co]
    """Callable invoked with a ``Ref`` the first time the state is needed."""

    debug_label: str | None = None
    """Optional label used in ``repr()`` and log output only."""

    def create(self, ref: Ref) -> T_co:
        return self.factory(ref)

    def __repr__(self) -> str:
        if self.debug_label is None:
            return f"Provider(at {id(self):#x})"
        return f"Provider({self.debug_label!r})"
