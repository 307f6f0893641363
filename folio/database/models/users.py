# folio/database/models/users.py
from __future__ import annotations

import uuid
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID as UUID_t

from sqlalchemy import Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from folio.database.core.main import Base
from folio.database.core.service_object import Timestamped

if TYPE_CHECKING:
    from .content import Content


class User(Timestamped, Base):
    """
    Account row. The id normally comes from the identity provider;
    a random one is generated when the caller does not supply it.
    """
    __tablename__ = "users"
    __timestamps_nullable__ = False

    id: Mapped[UUID_t] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    username: Mapped[Optional[str]] = mapped_column(Text, unique=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(Text)

    contents: Mapped[List["Content"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
