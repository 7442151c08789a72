from sqlalchemy import Column, Integer, String

from app.core.constants import ROLE_PHARMACIST, USER_ROLES
from app.database.base import Base, TimestampMixin, one_of


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String, nullable=False, unique=True)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_PHARMACIST)

    __table_args__ = (
        one_of("role", USER_ROLES, name="ck_users_role"),
    )


__all__ = ["User"]
