from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError
from app.core.security import Identity, ensure_admin, get_bearer_token, token_user_id
from app.database.session import get_db
from app.models.user import User


def _identity_from_header(db: Session, authorization: Optional[str]) -> Optional[Identity]:
    token = get_bearer_token(authorization)
    if token is None:
        return None
    user = db.get(User, token_user_id(token))
    if user is None:
        raise AuthenticationError("User not found")
    return Identity(user_id=user.id, username=user.username, role=user.role)


def optional_identity(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Optional[Identity]:
    return _identity_from_header(db, authorization)


def require_auth(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Identity:
    identity = _identity_from_header(db, authorization)
    if identity is None:
        raise AuthenticationError("Not authenticated")
    return identity


def require_admin(identity: Identity = Depends(require_auth)) -> Identity:
    return ensure_admin(identity)


__all__ = ["get_db", "optional_identity", "require_admin", "require_auth"]
