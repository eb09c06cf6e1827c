class ScopedConsumerError(Exception):
    """Represent a base class for all scoped_consumer failures.

    Catch this type when you want to handle any library error path without
    matching each concrete exception class individually.
    """


class ScopedConsumerUseAfterDisposeError(ScopedConsumerError):
    """Signal use of a scope after it was disposed.

    Raised by ``ScopedConsumer.read``, ``invalidate``, ``listen``,
    ``on_dispose`` and ``child`` when the scope (or one of the ancestors
    consulted while resolving a provider) is no longer mounted. The rejected
    call has no side effects.

    Typical fixes include creating a fresh scope instead of reusing a disposed
    one, or keeping the scope alive until every consumer is done with it. Test
    suites may reactivate a scope explicitly with
    ``scoped_consumer.testing.remount``.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"A scoped consumer was used after it was disposed (operation: {operation}).",
        )
