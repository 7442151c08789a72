from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from app.database.engine import engine

# Services commit through ``commit_or_rollback`` and return the ORM objects to
# routers after commit, so loaded attributes must survive it.
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


def get_db():
    """Request-scoped session for FastAPI dependencies."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope():
    """Session for operator scripts; anything left uncommitted is rolled back."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


__all__ = ["SessionLocal", "get_db", "session_scope"]
