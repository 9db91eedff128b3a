"""
Configuration for the semantic search service.

Values come from environment variables (a ``.env`` file is honored) and are
frozen into a Settings object at startup. Nothing reads the environment after
``load_settings()`` returns.
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

VERSION = "1.0.0"

VECTOR_PROVIDERS = ("memory", "faiss")
EMBED_PROVIDERS = ("hash", "sentence_transformers", "ollama")


@dataclass(frozen=True)
class Settings:
    """Immutable application configuration."""

    api_key: Optional[str] = None
    vector_provider: str = "memory"  # memory|faiss
    embed_provider: str = "hash"  # hash|sentence_transformers|ollama
    embed_model_name: str = "all-MiniLM-L6-v2"
    embed_dim: int = 384
    ollama_host: str = "http://localhost:11434"
    embed_timeout_sec: float = 30.0
    default_top_k: int = 10
    debug: bool = False
    cors_origins: Tuple[str, ...] = ("*",)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    cors = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        api_key=os.getenv("API_KEY") or None,
        vector_provider=os.getenv("VECTOR_PROVIDER", "memory").lower(),
        embed_provider=os.getenv("EMBED_PROVIDER", "hash").lower(),
        embed_model_name=os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2"),
        embed_dim=int(os.getenv("EMBED_DIM", "384")),
        ollama_host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
        embed_timeout_sec=float(os.getenv("EMBED_TIMEOUT_SEC", "30")),
        default_top_k=int(os.getenv("DEFAULT_TOP_K", "10")),
        debug=_env_bool("DEBUG", "false"),
        cors_origins=tuple(origin.strip() for origin in cors.split(",") if origin.strip()),
    )


def validate_settings(settings: Settings) -> List[str]:
    """Validate configuration and return any issues."""
    issues = []

    if not settings.api_key:
        issues.append("API_KEY is not set; every /v1 request will be rejected")

    if settings.vector_provider not in VECTOR_PROVIDERS:
        issues.append(f"Invalid VECTOR_PROVIDER: {settings.vector_provider}")

    if settings.embed_provider not in EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {settings.embed_provider}")

    if settings.embed_dim < 1:
        issues.append("EMBED_DIM must be >= 1")

    if settings.default_top_k < 1:
        issues.append("DEFAULT_TOP_K must be >= 1")

    if settings.embed_timeout_sec <= 0:
        issues.append("EMBED_TIMEOUT_SEC must be > 0")

    return issues


def get_embedding_provider(settings: Settings):
    """Get configured embedding provider implementation."""
    if settings.embed_provider == "sentence_transformers":
        from ..vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(settings.embed_model_name)
    elif settings.embed_provider == "ollama":
        from ..vector.embeddings import OllamaEmbedding
        return OllamaEmbedding(
            settings.embed_model_name,
            host=settings.ollama_host,
            timeout=settings.embed_timeout_sec
        )
    elif settings.embed_provider == "hash":
        from ..vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(settings.embed_dim)
    else:
        raise ValueError(f"Unknown embedding provider: {settings.embed_provider}")


def get_vector_store(settings: Settings, dimension: Optional[int] = None):
    """Get configured vector store implementation.

    Args:
        settings: Application settings
        dimension: Vector dimension for index-backed stores, defaults to EMBED_DIM
    """
    if settings.vector_provider == "faiss":
        from ..vector.faiss_store import FaissVectorStore
        return FaissVectorStore(dimension or settings.embed_dim, default_top_k=settings.default_top_k)
    elif settings.vector_provider == "memory":
        from ..vector.index import SimpleInMemoryVectorStore
        return SimpleInMemoryVectorStore(default_top_k=settings.default_top_k)
    else:
        raise ValueError(f"Unknown vector provider: {settings.vector_provider}")
