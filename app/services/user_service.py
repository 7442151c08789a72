import logging
from typing import Optional, cast

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.constants import ROLE_ADMIN
from app.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDenied,
    ValidationFailed,
)
from app.core.security import Identity, create_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.user import AuthResponse, UserRegister, UserUpdate
from app.services.unit_of_work import commit_or_rollback

logger = logging.getLogger(__name__)


def identity_for(user: User) -> Identity:
    return Identity(user_id=user.id, username=user.username, role=user.role)


def issue_token(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        token=create_access_token(user.id, role=user.role),
    )


def _admin_exists(db: Session) -> bool:
    return db.execute(select(User.id).where(User.role == ROLE_ADMIN).limit(1)).first() is not None


def _ensure_not_last_admin(db: Session, user: User) -> None:
    if user.role != ROLE_ADMIN:
        return
    other_admin = db.execute(
        select(User.id).where(User.role == ROLE_ADMIN, User.id != user.id).limit(1)
    ).first()
    if other_admin is None:
        raise ConflictError("Cannot remove the last admin account")


def _ensure_unique(
    db: Session,
    *,
    username: Optional[str] = None,
    email: Optional[str] = None,
    exclude_id: Optional[int] = None,
) -> None:
    clauses = []
    if username is not None:
        clauses.append(User.username == username)
    if email is not None:
        clauses.append(User.email == email)
    if not clauses:
        return
    stmt = select(User.id).where(or_(*clauses))
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.execute(stmt.limit(1)).first():
        raise ValidationFailed("User already exists")


def register_user(db: Session, payload: UserRegister, *, caller: Optional[Identity] = None) -> User:
    """Create a user account.

    Anyone may register a pharmacist. Admin accounts need an admin caller,
    except for the very first admin of a fresh installation.
    """
    with commit_or_rollback(db):
        if payload.role == ROLE_ADMIN and _admin_exists(db):
            if caller is None or not caller.is_admin:
                raise PermissionDenied("Only an admin can create admin accounts")
        _ensure_unique(db, username=payload.username, email=payload.email)
        user = User(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=payload.role,
        )
        db.add(user)
    db.refresh(user)
    logger.info("Registered %s user %s", user.role, user.username)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.execute(select(User).where(User.email == email.strip().lower())).scalars().first()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise AuthenticationError("Invalid email or password")
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(db: Session) -> list[User]:
    rows = db.execute(select(User).order_by(User.id)).scalars().all()
    return cast(list[User], list(rows))


def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
    user = get_user(db, user_id)
    changes = payload.model_dump(exclude_none=True)
    with commit_or_rollback(db):
        _ensure_unique(
            db,
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_id=user.id,
        )
        if changes.get("role", user.role) != user.role:
            _ensure_not_last_admin(db, user)
        password = changes.pop("password", None)
        for field_name, value in changes.items():
            setattr(user, field_name, value)
        if password:
            user.password_hash = hash_password(password)
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    with commit_or_rollback(db):
        _ensure_not_last_admin(db, user)
        db.delete(user)
    logger.info("Deleted user %s", user_id)


__all__ = [
    "authenticate",
    "delete_user",
    "get_user",
    "identity_for",
    "issue_token",
    "list_users",
    "register_user",
    "update_user",
]
