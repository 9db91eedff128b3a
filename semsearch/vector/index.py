"""
Vector store interface and the in-memory implementation.
"""

import copy
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import numpy as np

from .types import VectorRecord, QueryResult

# Result count for queries issued without an explicit top_k
DEFAULT_TOP_K = 10


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def fetch_by_ids(self, record_ids: List[str]) -> List[VectorRecord]:
        """Exact lookup. Returns only the records that exist."""
        pass

    @abstractmethod
    def upsert(self, record: VectorRecord) -> None:
        """Insert a record or fully replace the one with the same ID."""
        pass

    @abstractmethod
    def delete_by_ids(self, record_ids: List[str]) -> None:
        """Delete records by ID. Unknown IDs are ignored."""
        pass

    @abstractmethod
    def query(self, query_vector: List[float], top_k: Optional[int] = None) -> List[QueryResult]:
        """Search for similar vectors and return results ranked by descending score."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored records."""
        pass


class SimpleInMemoryVectorStore(IVectorStore):
    """
    Simple in-memory implementation of IVectorStore using cosine similarity.

    Safe to share between request threads: every operation holds the store lock.
    """

    def __init__(self, default_top_k: int = DEFAULT_TOP_K):
        self.default_top_k = default_top_k
        self._vectors: Dict[str, VectorRecord] = {}  # record_id -> VectorRecord
        self._index: Dict[str, np.ndarray] = {}      # record_id -> normalized_vector
        self._lock = threading.RLock()

    def fetch_by_ids(self, record_ids: List[str]) -> List[VectorRecord]:
        with self._lock:
            records = []
            for record_id in record_ids:
                record = self._vectors.get(record_id)
                if record is not None:
                    records.append(copy.deepcopy(record))
            return records

    def upsert(self, record: VectorRecord) -> None:
        # Copy so later caller mutations don't leak into the store
        stored = VectorRecord(
            id=record.id,
            vector=list(record.vector),
            metadata=copy.deepcopy(record.metadata)
        )

        # Store normalized vector for similarity calculations
        vector = np.asarray(record.vector, dtype=np.float32)
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm

        with self._lock:
            self._vectors[record.id] = stored
            self._index[record.id] = vector

    def delete_by_ids(self, record_ids: List[str]) -> None:
        with self._lock:
            for record_id in record_ids:
                self._vectors.pop(record_id, None)
                self._index.pop(record_id, None)

    def query(self, query_vector: List[float], top_k: Optional[int] = None) -> List[QueryResult]:
        if top_k is None:
            top_k = self.default_top_k

        # Normalize the query vector
        query_array = np.asarray(query_vector, dtype=np.float32)
        norm = np.linalg.norm(query_array)
        if norm == 0:
            # Return empty results if query vector is zero
            return []

        normalized_query = query_array / norm

        with self._lock:
            # Calculate cosine similarities
            similarities = {}
            for record_id, stored_vector in self._index.items():
                if stored_vector.shape != normalized_query.shape:
                    continue
                similarities[record_id] = float(np.dot(normalized_query, stored_vector))

            # Sort by similarity (descending) and return top_k results
            sorted_results = sorted(similarities.items(), key=lambda x: x[1], reverse=True)

            return [
                QueryResult(
                    id=record_id,
                    score=score,
                    metadata=copy.deepcopy(self._vectors[record_id].metadata)
                )
                for record_id, score in sorted_results[:top_k]
            ]

    def count(self) -> int:
        with self._lock:
            return len(self._vectors)
