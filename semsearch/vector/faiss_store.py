"""
FAISS-backed vector store.
"""

import copy
import threading
from typing import Dict, List, Optional
import numpy as np

from .types import VectorRecord, QueryResult
from .index import IVectorStore, DEFAULT_TOP_K
from ..core.errors import VectorStoreError


class FaissVectorStore(IVectorStore):
    """
    FAISS-backed implementation of IVectorStore.

    Vectors are L2-normalized and held in an ``IndexIDMap2`` over a flat
    inner-product index, so scores are cosine similarities. FAISS only knows
    int64 ids; string record IDs are mapped onto a monotonically increasing
    counter and the original records are kept alongside for exact fetches.
    A store lock makes each operation atomic across request threads.
    """

    def __init__(self, dimension: int = 384, default_top_k: int = DEFAULT_TOP_K):
        """
        Initialize FAISS vector store.

        Args:
            dimension: Dimension of the vectors (default: 384 for hash embeddings)
            default_top_k: Result count for queries without an explicit top_k
        """
        try:
            import faiss
        except ImportError:
            raise ImportError("FAISS not installed. Please install faiss-cpu package.")

        self.dimension = dimension
        self.default_top_k = default_top_k

        self.index = faiss.IndexIDMap2(faiss.IndexFlatIP(dimension))

        self.records: Dict[str, VectorRecord] = {}
        self.id_to_vector_index: Dict[str, int] = {}
        self.vector_id_map: Dict[int, str] = {}  # Vector index -> record ID
        self.next_vector_index = 0
        self._lock = threading.RLock()

    def _prepare(self, vector: List[float]) -> np.ndarray:
        """Validate dimension and normalize for cosine similarity."""
        array = np.asarray(vector, dtype=np.float32)
        if array.ndim != 1 or array.shape[0] != self.dimension:
            raise VectorStoreError(
                f"Vector dimension {array.size} does not match expected dimension {self.dimension}"
            )

        norm = np.linalg.norm(array)
        if norm > 0:  # Zero vectors are stored as-is and score 0 against everything
            array = array / norm

        return array.reshape(1, -1).astype(np.float32)

    def _remove(self, record_ids: List[str]) -> None:
        vector_indices = []
        for record_id in record_ids:
            vector_index = self.id_to_vector_index.pop(record_id, None)
            if vector_index is not None:
                vector_indices.append(vector_index)
                del self.vector_id_map[vector_index]
            self.records.pop(record_id, None)

        if vector_indices:
            self.index.remove_ids(np.array(vector_indices, dtype=np.int64))

    def fetch_by_ids(self, record_ids: List[str]) -> List[VectorRecord]:
        with self._lock:
            return [copy.deepcopy(self.records[record_id]) for record_id in record_ids if record_id in self.records]

    def upsert(self, record: VectorRecord) -> None:
        vector_array = self._prepare(record.vector)
        stored = VectorRecord(
            id=record.id,
            vector=list(record.vector),
            metadata=copy.deepcopy(record.metadata)
        )

        with self._lock:
            # Replace semantics: drop the previous vector for this ID first
            self._remove([record.id])

            vector_index = self.next_vector_index
            self.index.add_with_ids(vector_array, np.array([vector_index], dtype=np.int64))
            self.next_vector_index += 1

            self.id_to_vector_index[record.id] = vector_index
            self.vector_id_map[vector_index] = record.id
            self.records[record.id] = stored

    def delete_by_ids(self, record_ids: List[str]) -> None:
        with self._lock:
            self._remove(list(record_ids))

    def query(self, query_vector: List[float], top_k: Optional[int] = None) -> List[QueryResult]:
        if top_k is None:
            top_k = self.default_top_k

        with self._lock:
            if not self.index.ntotal:
                return []

            query_array = self._prepare(query_vector)

            scores, indices = self.index.search(query_array, min(top_k, self.index.ntotal))

            query_results = []
            for score, vector_index in zip(scores[0], indices[0]):
                # FAISS pads missing results with -1
                record_id = self.vector_id_map.get(int(vector_index))
                if record_id is None:
                    continue
                query_results.append(QueryResult(
                    id=record_id,
                    score=float(score),
                    metadata=copy.deepcopy(self.records[record_id].metadata)
                ))

            return query_results

    def count(self) -> int:
        with self._lock:
            return len(self.records)
