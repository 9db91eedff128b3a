"""
Repository contract consumed by the document service.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .document import Document, SearchResult


class IDocumentRepository(ABC):
    """Abstract interface for document persistence and similarity search."""

    @abstractmethod
    def index_document(self, document: Document) -> str:
        """Store or fully replace a document. Returns its id."""
        pass

    @abstractmethod
    def get_document(self, doc_id: str) -> Optional[Document]:
        """Exact lookup by id. Returns None when absent."""
        pass

    @abstractmethod
    def delete_documents(self, doc_ids: List[str]) -> List[bool]:
        """Delete a batch of ids. One result per input id, same order."""
        pass

    @abstractmethod
    def delete_document(self, doc_id: str) -> bool:
        """Delete a single document."""
        pass

    @abstractmethod
    def search_documents(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """Similarity search, ordered as ranked by the store."""
        pass
