"""
Store-side record shapes. Never exposed to API callers.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass


@dataclass
class VectorRecord:
    """Represents a vector record with flattened metadata."""

    id: str
    """Unique identifier for the vector record"""

    vector: List[float]
    """The embedding of the record's text"""

    metadata: Dict[str, Any]
    """Flattened metadata, including the reserved text key"""


@dataclass
class QueryResult:
    """Represents a ranked match from a nearest-neighbor query."""

    id: str
    """Identifier for the matching record"""

    score: float
    """Store-defined similarity score, higher is closer"""

    metadata: Optional[Dict[str, Any]] = None
    """Metadata of the matched record, if the store returned any"""
