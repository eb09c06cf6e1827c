from scoped_consumer._internal.consumer import ListenerChangeCallback, ScopedConsumer
from scoped_consumer._internal.notifier import Notifier, ValueChanged, VoidCallback
from scoped_consumer._internal.providers import Provider
from scoped_consumer._internal.ref import Ref
from scoped_consumer.exceptions import (
    ScopedConsumerError,
    ScopedConsumerUseAfterDisposeError,
)

__all__ = [
    "ListenerChangeCallback",
    "Notifier",
    "Provider",
    "Ref",
    "ScopedConsumer",
    "ScopedConsumerError",
    "ScopedConsumerUseAfterDisposeError",
    "ValueChanged",
    "VoidCallback",
]
