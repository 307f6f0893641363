# folio/services/schemas/__init__.py
from folio.services.schemas.users import (
    UserCreate,
    UserRead,
    UserUpdate,
)
from folio.services.schemas.content import (
    ContentCreate,
    ContentRead,
    ContentUpdate,
    ContentStatusUpdate,
    ContentMetadataCreate,
    ContentMetadataRead,
)
from folio.services.schemas.documents import (
    DocumentCreate,
    DocumentRead,
    DocumentUpdate,
    DocumentSearch,
    DocumentSearchResult,
    SearchHitRead,
)
__all__ = [
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "ContentCreate",
    "ContentRead",
    "ContentUpdate",
    "ContentStatusUpdate",
    "ContentMetadataCreate",
    "ContentMetadataRead",
    "DocumentCreate",
    "DocumentRead",
    "DocumentUpdate",
    "DocumentSearch",
    "DocumentSearchResult",
    "SearchHitRead",
]
