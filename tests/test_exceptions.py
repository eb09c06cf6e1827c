"""Tests for the exception hierarchy."""

import pytest

from scoped_consumer import ScopedConsumer
from scoped_consumer.exceptions import ScopedConsumerError, ScopedConsumerUseAfterDisposeError


class TestScopedConsumerUseAfterDisposeError:
    def test_is_scoped_consumer_error(self) -> None:
        assert issubclass(ScopedConsumerUseAfterDisposeError, ScopedConsumerError)

    def test_message_names_operation(self) -> None:
        error = ScopedConsumerUseAfterDisposeError("invalidate")

        assert error.operation == "invalidate"
        assert str(error) == (
            "A scoped consumer was used after it was disposed (operation: invalidate)."
        )

    def test_can_be_caught_as_base_error(self) -> None:
        scope = ScopedConsumer()
        scope.dispose()

        with pytest.raises(ScopedConsumerError):
            scope.on_dispose(lambda: None)
