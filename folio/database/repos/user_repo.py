# folio/database/repos/user_repo.py
from __future__ import annotations
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from folio.database.models import User


class UserRepo:
    def __init__(self, session: Session) -> None:
        self.db = session

    def get(self, user_id: UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email).limit(1)
        return self.db.execute(stmt).scalars().first()

    def list_users(self, *, limit: int = 50, offset: int = 0) -> List[User]:
        stmt = select(User).order_by(User.created_at.asc(), User.email.asc()).offset(offset).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        *,
        email: str,
        id: UUID | None = None,
        username: str | None = None,
        profile_image_url: str | None = None,
    ) -> User:
        obj = User(email=email, username=username, profile_image_url=profile_image_url)
        if id is not None:
            obj.id = id
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(
        self,
        user_id: UUID,
        *,
        email: str | None = None,
        username: str | None = None,
        profile_image_url: str | None = None,
    ) -> User:
        obj = self.get(user_id)
        if not obj:
            raise ValueError("User not found")
        if email is not None:
            obj.email = email
        if username is not None:
            obj.username = username
        if profile_image_url is not None:
            obj.profile_image_url = profile_image_url
        self.db.flush()
        return obj

    def delete(self, user_id: UUID) -> None:
        obj = self.get(user_id)
        if not obj:
            return
        self.db.delete(obj)
        self.db.flush()
