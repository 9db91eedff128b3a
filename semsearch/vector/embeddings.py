"""
Embedding providers: text to fixed-dimension float vectors.
"""

from abc import ABC, abstractmethod
import hashlib
from numbers import Real
from typing import List, Optional

import ollama
from sentence_transformers import SentenceTransformer

from ..core.errors import EmbeddingError
from ..util.logging import logger


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


def _validate_vector(vector, source: str) -> List[float]:
    """Check a provider response is a non-empty flat list of numbers."""
    if not isinstance(vector, (list, tuple)) or not vector:
        raise EmbeddingError(f"Invalid response from {source}: expected a non-empty list of floats, got {type(vector).__name__}")
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in vector):
        raise EmbeddingError(f"Invalid response from {source}: vector contains non-numeric values")
    return [float(v) for v in vector]


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    Uses chained hashing to generate reproducible embeddings from text,
    which is useful for testing without requiring external model dependencies.
    Vectors carry no semantic meaning.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def embed_text(self, text: str) -> List[float]:
        """Generate deterministic embedding vector using hash function."""
        vector = []
        counter = 0
        while len(vector) < self.dimension:
            hex_dig = hashlib.md5(f"{counter}:{text}".encode()).hexdigest()
            for i in range(0, len(hex_dig), 8):
                value = int(hex_dig[i:i+8], 16)
                # Map to [-1, 1] for cosine similarity
                vector.append((value / (2**32)) * 2 - 1)
            counter += 1

        return vector[:self.dimension]

    def get_dimension(self) -> int:
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    The model is loaded on first use.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            logger.info(f"Loading sentence-transformers model {self.model_name}")
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_text(self, text: str) -> List[float]:
        try:
            embedding = self.model.encode(text, convert_to_tensor=False)
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embedding with {self.model_name}: {e}") from e
        return _validate_vector(embedding.tolist(), self.model_name)

    def get_dimension(self) -> int:
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension


class OllamaEmbedding(IEmbeddingProvider):
    """Remote embedding provider backed by an Ollama server."""

    def __init__(self, model_name: str, host: Optional[str] = None, timeout: Optional[float] = None, client=None):
        self.model_name = model_name
        self.host = host
        self.timeout = timeout
        self._client = client
        self._dimension = None

    @property
    def client(self):
        if self._client is None:
            self._client = ollama.Client(host=self.host, timeout=self.timeout)
        return self._client

    def embed_text(self, text: str) -> List[float]:
        try:
            response = self.client.embed(model=self.model_name, input=text)
            embeddings = response["embeddings"]
        except ollama.ResponseError as e:
            logger.error(f"Ollama embedding error: {e}")
            raise EmbeddingError(f"Failed to generate embedding: model error from {self.model_name}: {e}") from e
        except Exception as e:
            logger.error(f"Ollama embedding error: {e}")
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e

        if not isinstance(embeddings, list) or not embeddings:
            raise EmbeddingError(f"Invalid response from Ollama: {response!r}"[:300])

        return _validate_vector(embeddings[0], f"Ollama model {self.model_name}")

    def get_dimension(self) -> int:
        if self._dimension is None:
            self._dimension = len(self.embed_text("dimension probe"))
        return self._dimension
