"""Semantic search over free-text documents backed by an embedding provider and a vector store."""

from .core.config import VERSION

__version__ = VERSION
