"""Where provider state lives in a tree of scopes.

This module covers:

1. A child reuses state its parent already created.
2. State first read by a child is owned by that child; siblings get their own.
3. ``invalidate`` makes the next read rebuild the state.
4. Disposing the root disposes children and runs cleanup registered by factories.
"""

from __future__ import annotations

import itertools

from scoped_consumer import Provider, Ref, ScopedConsumer
from scoped_consumer.exceptions import ScopedConsumerUseAfterDisposeError

_session_ids = itertools.count(1)
closed_sessions: list[int] = []


class Session:
    def __init__(self, session_id: int) -> None:
        self.session_id = session_id


def provide_session(ref: Ref) -> Session:
    session = Session(next(_session_ids))
    ref.on_dispose(lambda: closed_sessions.append(session.session_id))
    return session


session_provider = Provider(provide_session, debug_label="session")


def main() -> None:
    root = ScopedConsumer(debug_label="root")
    root_session = root.read(session_provider)

    request = root.child(debug_label="request")
    shares_parent_state = request.read(session_provider) is root_session
    print(f"child_shares_parent_state={shares_parent_state}")  # => child_shares_parent_state=True

    orphan_provider = Provider(provide_session, debug_label="orphan")
    first = root.child()
    second = root.child()
    first_session = first.read(orphan_provider)
    second_session = second.read(orphan_provider)
    print(f"siblings_share_state={first_session is second_session}")  # => siblings_share_state=False

    root.invalidate(session_provider)
    rebuilt = root.read(session_provider)
    print(f"rebuilt_after_invalidate={rebuilt is not root_session}")  # => rebuilt_after_invalidate=True

    root.dispose()
    print(f"children_disposed={not request.mounted and not first.mounted}")  # => children_disposed=True
    print(f"closed_sessions={closed_sessions}")  # => closed_sessions=[1, 2, 3, 4]

    try:
        request.read(session_provider)
    except ScopedConsumerUseAfterDisposeError as error:
        error_name = type(error).__name__
    print(
        f"use_after_dispose={error_name}",
    )  # => use_after_dispose=ScopedConsumerUseAfterDisposeError


if __name__ == "__main__":
    main()
