import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)


@contextmanager
def commit_or_rollback(db: Session):
    """Commit the block's writes once, or roll all of them back."""
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Write rejected by database constraint: %s", exc.orig)
        raise ValidationFailed("Write violates a uniqueness or reference constraint") from exc
    except Exception:
        db.rollback()
        raise


__all__ = ["commit_or_rollback"]
