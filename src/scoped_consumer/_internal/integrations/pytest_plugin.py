from __future__ import annotations

from collections.abc import Iterator

import pytest

from scoped_consumer._internal.consumer import ScopedConsumer


@pytest.fixture()
def scoped_consumer() -> Iterator[ScopedConsumer]:
    """Provide a root scope that is disposed when the test finishes.

    The fixture is function-scoped, so cached provider state is isolated
    between tests. Override it in a ``conftest.py`` to pre-populate state or
    to share a scope across a wider fixture scope.

    """
    with ScopedConsumer(debug_label="pytest") as consumer:
        yield consumer
