"""
Document service: input validation and identity assignment in front of the repository.
"""

import uuid
from typing import Any, Dict, List, Mapping, Optional

from .document import Document, SearchQuery, SearchResult
from .errors import ValidationError
from .repository import IDocumentRepository
from ..util.logging import logger


class DocumentService:
    """
    Validates caller input, assigns identity and delegates to a repository.

    This is the only layer that knows the domain rules (text required,
    id optional). Everything else is passed through unchanged.
    """

    def __init__(self, repository: IDocumentRepository):
        self.repository = repository

    def index_document(self, partial: Mapping[str, Any]) -> str:
        """
        Index a document given as a partial mapping.

        Args:
            partial: Mapping with ``text`` (required), ``id`` and ``metadata`` (optional)

        Returns:
            The id the document was stored under

        Raises:
            ValidationError: text missing or empty, or metadata not a mapping
        """
        text = partial.get("text")
        if not isinstance(text, str) or not text:
            raise ValidationError("document text is required")

        metadata = partial.get("metadata")
        if metadata is None:
            metadata = {}
        elif not isinstance(metadata, Mapping):
            raise ValidationError("document metadata must be an object")

        doc_id = partial.get("id") or str(uuid.uuid4())

        document = Document(id=str(doc_id), text=text, metadata=dict(metadata))
        indexed_id = self.repository.index_document(document)

        logger.log_document_operation("index", indexed_id, {"metadata_keys": sorted(document.metadata)})
        return indexed_id

    def get_document(self, doc_id: str) -> Optional[Document]:
        return self.repository.get_document(doc_id)

    def delete_documents(self, doc_ids: List[str]) -> List[bool]:
        return self.repository.delete_documents(doc_ids)

    def delete_document(self, doc_id: str) -> bool:
        return self.repository.delete_document(doc_id)

    def search_documents(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """Run a similarity search. ``limit`` is forwarded unchanged."""
        search = self.build_query(query, limit)
        return self.repository.search_documents(search.query, search.limit)

    @staticmethod
    def build_query(query: Any, limit: Any = None) -> SearchQuery:
        """
        Validate raw search input.

        Raises:
            ValidationError: query missing or empty, or limit not a positive integer
        """
        if not isinstance(query, str) or not query:
            raise ValidationError("search query is required")

        # bool is an int subclass
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
            raise ValidationError("search limit must be a positive integer")

        return SearchQuery(query=query, limit=limit)
