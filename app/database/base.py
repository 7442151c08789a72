from sqlalchemy import CheckConstraint, Column, DateTime
from sqlalchemy.orm import declarative_base

from app.core.dates import utc_now

Base = declarative_base()


def one_of(column: str, values, *, name: str) -> CheckConstraint:
    allowed = ", ".join("'{}'".format(value) for value in values)
    return CheckConstraint("{} IN ({})".format(column, allowed), name=name)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )


__all__ = ["Base", "TimestampMixin", "one_of"]
