"""
Domain model for indexed documents and search results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Document:
    """A free-text document with an open metadata mapping."""

    id: str
    """Stable unique key, caller-supplied or generated"""

    text: str
    """The indexed content"""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """User metadata; never contains the reserved text key"""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "metadata": dict(self.metadata)}


@dataclass
class SearchResult:
    """A document matched by similarity search."""

    document: Document

    score: float
    """Store-defined similarity, higher is closer. Not normalized."""

    def to_dict(self) -> Dict[str, Any]:
        return {"document": self.document.to_dict(), "score": self.score}


@dataclass
class SearchQuery:
    """Validated search input. A limit of None defers to the store default."""

    query: str
    limit: Optional[int] = None
