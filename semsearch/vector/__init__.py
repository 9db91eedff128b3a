# Package initialization for vector module
from .index import IVectorStore, SimpleInMemoryVectorStore, DEFAULT_TOP_K
from .faiss_store import FaissVectorStore
from .types import VectorRecord, QueryResult
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerEmbedding, OllamaEmbedding
from .repository import VectorBackedRepository, RESERVED_TEXT_KEY

__all__ = [
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'DEFAULT_TOP_K',
    'FaissVectorStore',
    'VectorRecord',
    'QueryResult',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'OllamaEmbedding',
    'VectorBackedRepository',
    'RESERVED_TEXT_KEY'
]
