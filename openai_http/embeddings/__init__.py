"""Embeddings service."""

from .service import EMBEDDINGS_PATH, EmbeddingsService, build_embeddings_body

__all__ = ["EmbeddingsService", "build_embeddings_body", "EMBEDDINGS_PATH"]
