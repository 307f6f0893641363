"""OpenAI-compatible embeddings over plain HTTP."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from folio.common.settings import get_settings
from folio.domain.errors import EmbeddingProviderError

log = logging.getLogger(__name__)


def prepare_for_embedding(title: str, content: str) -> str:
    return f"{title}\n\n{content}".strip()


class OpenAIEmbeddings:
    """Client for the `/embeddings` endpoint. Satisfies EmbeddingsPort."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        dimensions: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Bearer token (defaults to OPENAI_API_KEY)
            base_url: API root, e.g. https://api.openai.com/v1 (defaults to settings)
            model: Embedding model name (defaults to settings)
            dimensions: Expected vector length (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Optional httpx transport, mainly for tests
        """
        settings = get_settings()
        cfg = settings.embeddings
        self.base_url = (base_url or cfg.base_url).rstrip("/")
        self.model = model or cfg.model
        self.dimensions = dimensions or cfg.dimensions

        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key or settings.openai_api_key}"},
            timeout=timeout or cfg.timeout_sec,
            transport=transport,
        )

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def embed(self, text: str) -> List[float]:
        """Return the embedding vector for `text`.

        Raises:
            EmbeddingProviderError: on transport errors, non-2xx responses,
                malformed bodies or a vector of the wrong length.
        """
        try:
            response = self._client.post("/embeddings", json={"model": self.model, "input": text})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            log.error("Embedding request failed: %s", exc)
            raise EmbeddingProviderError(f"embedding request failed: {exc}") from exc

        try:
            vector = response.json()["data"][0]["embedding"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise EmbeddingProviderError("malformed embedding response") from exc

        if len(vector) != self.dimensions:
            raise EmbeddingProviderError(
                f"expected {self.dimensions}-dimensional embedding, got {len(vector)}"
            )
        return [float(x) for x in vector]
