# folio/database/models/__init__.py

from folio.database.core.main import Base
from folio.database.models.users import User
from folio.database.models.content import Content, ContentMetadata
from folio.database.models.documents import Document

__all__ = [
    "Base",
    "User",
    "Content",
    "ContentMetadata",
    "Document",
]
