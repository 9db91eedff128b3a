"""
Error taxonomy for the document pipeline.

Absence of a document is not an error: repositories return ``None``.
"""


class SemanticSearchError(Exception):
    """Base class for all service errors."""


class ValidationError(SemanticSearchError):
    """Caller input violates a precondition. Nothing downstream was contacted."""


class InfrastructureError(SemanticSearchError):
    """An embedding or vector store call failed. The original error is kept as ``__cause__``."""


class EmbeddingError(InfrastructureError):
    """The embedding provider failed or returned an unusable response."""


class VectorStoreError(InfrastructureError):
    """The vector store rejected or failed an operation."""

