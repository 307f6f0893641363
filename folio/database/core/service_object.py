# folio/database/core/service_object.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, declared_attr


class Timestamped:
    """
    Mixin providing created_at / updated_at (timestamptz, server default now()).
    Use with multiple inheritance: `class MyModel(Timestamped, Base): ...`
    Subclasses that need NOT NULL timestamps set `__timestamps_nullable__ = False`.
    """
    __abstract__ = True
    __timestamps_nullable__ = True

    @declared_attr
    def created_at(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=cls.__timestamps_nullable__,
        )

    @declared_attr
    def updated_at(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=cls.__timestamps_nullable__,
        )
