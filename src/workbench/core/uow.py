"""Transactions spanning a translation edit and its history record.

A translation and the TranslationChange describing its edit are written in
one transaction: either both land or neither does. Errors are re-raised
after rollback, never retried.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlmodel import Session

from workbench.core.db import engine
from workbench.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """One edit's transaction over a SQLModel session.

    The translation is flushed first so its change record can reference
    the stored row; both are committed by `atomic()` on exit.
    """

    def __init__(self, session: Session):
        self._session = session
        self._committed = False

    @property
    def session(self) -> Session:
        return self._session

    def commit(self) -> None:
        """Commit the edit. Repeated calls do nothing."""
        if not self._committed:
            self._session.commit()
            self._committed = True
            logger.debug("edit_committed")

    def rollback(self) -> None:
        """Discard the edit and any pending change record."""
        if not self._committed:
            self._session.rollback()
            logger.debug("edit_rolled_back")

    def flush(self) -> None:
        """Write the edited translation so the change record can follow it."""
        self._session.flush()


@contextmanager
def atomic(
    session: Session | None = None,
) -> Generator[UnitOfWork, None, None]:
    """Save an edit and its change record together.

    Commits when the block exits normally; on any exception rolls back and
    re-raises it unchanged, so database errors reach the caller as raised.

    Args:
        session: Session holding the edited translation. A new one bound to
            the workbench engine is opened (and closed) when omitted.

    Yields:
        UnitOfWork for the edit
    """
    owns_session = session is None
    active_session = Session(engine) if owns_session else session
    assert active_session is not None

    uow = UnitOfWork(active_session)
    try:
        yield uow
        uow.commit()
    except Exception:
        uow.rollback()
        raise
    finally:
        if owns_session:
            active_session.close()
