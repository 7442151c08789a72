from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import Identity
from app.dependencies import get_db, optional_identity, require_admin, require_auth
from app.schemas.common import MessageResponse
from app.schemas.user import AuthResponse, UserLogin, UserRead, UserRegister, UserUpdate
from app.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegister,
    db: Session = Depends(get_db),
    caller: Optional[Identity] = Depends(optional_identity),
):
    user = user_service.register_user(db, payload, caller=caller)
    return user_service.issue_token(user)


@router.post("/login", response_model=AuthResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, payload.email, payload.password)
    return user_service.issue_token(user)


@router.get("/profile", response_model=UserRead)
def profile(db: Session = Depends(get_db), identity: Identity = Depends(require_auth)):
    return user_service.get_user(db, identity.user_id)


@router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db), _admin: Identity = Depends(require_admin)):
    return user_service.list_users(db)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    return user_service.update_user(db, user_id, payload)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    _admin: Identity = Depends(require_admin),
):
    user_service.delete_user(db, user_id)
    return MessageResponse(message="User removed")


__all__ = ["router"]
