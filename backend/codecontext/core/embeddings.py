"""Embedding models for semantic search."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Raised when an embedding provider call fails."""


class Embedder:
    """Abstract base class for embedding models."""

    def embed(self, text: str) -> List[float]:
        """Embed a single text into a vector.

        Raises:
            ProviderError: If the upstream call fails for any reason
        """
        raise NotImplementedError


class GeminiEmbedder(Embedder):
    """Embedder backed by the Generative Language ``embedContent`` API."""

    def __init__(
        self,
        api_key: str,
        model: str = "embedding-001",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ValueError("API key is required for the Gemini embedder")
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def embed(self, text: str) -> List[float]:
        url = f"{self.api_base}/models/{self.model}:embedContent"
        payload = {
            "model": f"models/{self.model}",
            "content": {"parts": [{"text": text}]},
        }
        try:
            response = self.http.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as e:
            raise ProviderError(f"Embedding request timed out after {self.timeout}s") from e
        except (requests.RequestException, ValueError) as e:
            raise ProviderError(f"Embedding request failed: {e}") from e

        values = data.get("embedding", {}).get("values")
        if not values:
            raise ProviderError(f"Unexpected response format: {data}")
        return [float(v) for v in values]


class SentenceTransformersEmbedder(Embedder):
    """Embedder using SentenceTransformers library."""

    def __init__(self, model_name: str) -> None:
        from sentence_transformers import SentenceTransformer  # type: ignore
        self.model = SentenceTransformer(model_name)

    def embed(self, text: str) -> List[float]:
        try:
            arr = self.model.encode([text], normalize_embeddings=True, show_progress_bar=False)
        except Exception as e:
            raise ProviderError(f"Local embedding failed: {e}") from e
        return arr[0].tolist()


def make_embedder(cfg: Dict, credential: Optional[str] = None) -> Embedder:
    """Create a fresh embedder from config.

    Args:
        cfg: Configuration dictionary
        credential: Caller-supplied API key, overrides the configured one

    Returns:
        Embedder instance

    Raises:
        ValueError: If the backend is unknown or no credential is available
    """
    emb_cfg = cfg.get("embedding", {})
    backend = str(emb_cfg.get("backend", "gemini")).strip().lower()

    if backend == "gemini":
        api_key = credential or emb_cfg.get("api_key")
        if not api_key:
            raise ValueError("No API key available for the gemini embedding backend")
        return GeminiEmbedder(
            api_key=api_key,
            model=emb_cfg.get("gemini_model", "embedding-001"),
            api_base=emb_cfg.get("gemini_api_base", "https://generativelanguage.googleapis.com/v1beta"),
            timeout=float(emb_cfg.get("timeout_seconds", 10)),
        )

    if backend == "sentence_transformers":
        model_name = emb_cfg.get("sentence_transformers_model", "all-MiniLM-L6-v2")
        return SentenceTransformersEmbedder(model_name)

    raise ValueError(f"Invalid embedding.backend: {backend!r}")
