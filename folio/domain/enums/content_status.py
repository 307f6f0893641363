# folio/domain/enums/content_status.py
from __future__ import annotations
from enum import StrEnum

class ContentStatus(StrEnum):
    draft = "draft"
    published = "published"
    archived = "archived"
