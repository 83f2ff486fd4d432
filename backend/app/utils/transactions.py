from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """
    Run a block of DB work as one transaction on `session`.
    Commits when the block finishes, rolls back every write made in it when
    anything raises (the exception is re-raised). Works whether or not the
    session has already autobegun a transaction.
    Usage:
        with unit_of_work(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
