# folio/services/api/routers/users.py
from __future__ import annotations

from http import HTTPStatus
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from folio.common.settings import get_settings
from folio.database.models import User
from folio.database.repos.user_repo import UserRepo
from folio.services.api.deps import transactional_session
from folio.services.schemas.users import UserCreate, UserRead, UserUpdate

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/users", tags=["users"])


def _user_or_404(repo: UserRepo, user_id: UUID) -> User:
    obj = repo.get(user_id)
    if not obj:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="User not found")
    return obj


@router.get("", response_model=List[UserRead])
def list_users(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(transactional_session),
) -> List[UserRead]:
    return [UserRead.model_validate(u) for u in UserRepo(db).list_users(limit=limit, offset=offset)]


@router.post("", response_model=UserRead, status_code=HTTPStatus.CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(transactional_session),
) -> UserRead:
    repo = UserRepo(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail="Email already registered")
    if payload.id is not None and repo.get(payload.id):
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail="User id already exists")
    try:
        obj = repo.create(
            id=payload.id,
            email=payload.email,
            username=payload.username,
            profile_image_url=payload.profile_image_url,
        )
    except IntegrityError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e.orig))
    db.refresh(obj)
    return UserRead.model_validate(obj)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: UUID,
    db: Session = Depends(transactional_session),
) -> UserRead:
    return UserRead.model_validate(_user_or_404(UserRepo(db), user_id))


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: UUID,
    payload: UserUpdate,
    db: Session = Depends(transactional_session),
) -> UserRead:
    repo = UserRepo(db)
    _user_or_404(repo, user_id)
    if payload.email is not None:
        other = repo.get_by_email(payload.email)
        if other and other.id != user_id:
            raise HTTPException(status_code=HTTPStatus.CONFLICT, detail="Email already registered")
    try:
        obj = repo.update(
            user_id,
            email=payload.email,
            username=payload.username,
            profile_image_url=payload.profile_image_url,
        )
    except IntegrityError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e.orig))
    db.refresh(obj)
    return UserRead.model_validate(obj)


@router.delete("/{user_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(transactional_session),
) -> None:
    repo = UserRepo(db)
    _user_or_404(repo, user_id)
    # content rows go with it (ON DELETE CASCADE)
    repo.delete(user_id)
    return None
