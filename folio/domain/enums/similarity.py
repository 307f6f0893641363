# folio/domain/enums/similarity.py
from __future__ import annotations
from enum import StrEnum


class SimilarityOperator(StrEnum):
    """pgvector distance operators, named after the comparator they map to."""

    cosine = "<=>"          # cosine distance (most common)
    l2 = "<->"              # euclidean distance
    inner_product = "<#>"   # negative inner product

    @property
    def comparator(self) -> str:
        return {
            SimilarityOperator.cosine: "cosine_distance",
            SimilarityOperator.l2: "l2_distance",
            SimilarityOperator.inner_product: "max_inner_product",
        }[self]
