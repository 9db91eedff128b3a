"""
Vector-backed document repository.

Translates between domain documents and (embedding, vector store) pairs and
owns the flattened metadata encoding: the document text is stored under the
reserved key ``_ss_text`` next to the user's metadata keys.
"""

from typing import Any, Dict, List, Optional, Tuple

from .embeddings import IEmbeddingProvider
from .index import IVectorStore
from .types import VectorRecord, QueryResult
from ..core.document import Document, SearchResult
from ..core.errors import EmbeddingError, InfrastructureError, VectorStoreError
from ..core.repository import IDocumentRepository
from ..util.logging import logger

RESERVED_TEXT_KEY = "_ss_text"


def flatten_metadata(text: str, metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Build store metadata. The document text always wins over a user key of the same name."""
    flat = dict(metadata or {})
    flat[RESERVED_TEXT_KEY] = text
    return flat


def unflatten_metadata(flat: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """Split store metadata into (text, user metadata)."""
    metadata = dict(flat)
    text = metadata.pop(RESERVED_TEXT_KEY, "")
    if text is None:
        text = ""
    return str(text), metadata


class VectorBackedRepository(IDocumentRepository):
    """
    IDocumentRepository over an embedding provider and a vector store.

    Each call makes at most two sequential collaborator calls and never
    retries. Collaborator failures surface as InfrastructureError with the
    original exception chained, except batch deletes which degrade to
    all-False.
    """

    def __init__(self, embedding_provider: IEmbeddingProvider, vector_store: IVectorStore):
        self.embedding_provider = embedding_provider
        self.vector_store = vector_store

    def _embed(self, text: str) -> List[float]:
        try:
            return self.embedding_provider.embed_text(text)
        except InfrastructureError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e

    def _store_call(self, action: str, func, *args):
        try:
            return func(*args)
        except InfrastructureError:
            raise
        except Exception as e:
            raise VectorStoreError(f"Failed to {action}: {e}") from e

    def index_document(self, document: Document) -> str:
        embedding = self._embed(document.text)

        if document.metadata and RESERVED_TEXT_KEY in document.metadata:
            logger.warning(f"Document {document.id}: metadata key '{RESERVED_TEXT_KEY}' is reserved and was overwritten")

        record = VectorRecord(
            id=document.id,
            vector=embedding,
            metadata=flatten_metadata(document.text, document.metadata)
        )
        self._store_call("upsert vector", self.vector_store.upsert, record)

        logger.log_vector_operation("upsert", [document.id], {"dimension": len(embedding)})
        return document.id

    def get_document(self, doc_id: str) -> Optional[Document]:
        records = self._store_call("fetch vector by id", self.vector_store.fetch_by_ids, [doc_id])
        if not records:
            return None

        record = records[0]
        if record.metadata is None:
            logger.warning(f"Record {record.id} has no metadata; treating as absent")
            return None

        text, metadata = unflatten_metadata(record.metadata)
        return Document(id=record.id, text=text, metadata=metadata)

    def delete_documents(self, doc_ids: List[str]) -> List[bool]:
        doc_ids = list(doc_ids)
        if not doc_ids:
            return []

        try:
            self.vector_store.delete_by_ids(doc_ids)
        except Exception as e:
            # One store call for the whole batch, so no per-id outcome exists
            logger.log_vector_operation("delete", doc_ids, {"error": str(e)}, status="failed")
            return [False] * len(doc_ids)

        logger.log_vector_operation("delete", doc_ids)
        return [True] * len(doc_ids)

    def delete_document(self, doc_id: str) -> bool:
        return self.delete_documents([doc_id])[0]

    def search_documents(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        query_embedding = self._embed(query)
        matches = self._store_call("query vectors", self.vector_store.query, query_embedding, limit)
        return [self._to_search_result(match) for match in matches]

    @staticmethod
    def _to_search_result(match: QueryResult) -> SearchResult:
        if not match.metadata:
            # Malformed or partial record: keep it so results stay one-per-match
            return SearchResult(document=Document(id=match.id, text="", metadata={}), score=match.score)

        text, metadata = unflatten_metadata(match.metadata)
        return SearchResult(document=Document(id=match.id, text=text, metadata=metadata), score=match.score)
