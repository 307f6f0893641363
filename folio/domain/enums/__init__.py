# folio/domain/enums/__init__.py
from folio.domain.enums.content_status import ContentStatus
from folio.domain.enums.similarity import SimilarityOperator
__all__ = [
    "ContentStatus",
    "SimilarityOperator",
]
