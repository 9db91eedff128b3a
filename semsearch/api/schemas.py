"""
Request and response models for the document API.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class DocumentRequest(BaseModel):
    # text is optional here so the service can report it as a validation error
    id: Optional[str] = None
    text: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class DocumentResponse(BaseModel):
    id: str
    text: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class IndexResponse(BaseModel):
    id: str


class SearchRequest(BaseModel):
    query: Optional[str] = None
    limit: Optional[int] = Field(default=None, gt=0)


class SearchResultItem(BaseModel):
    document: DocumentResponse
    score: float


class SearchResponse(BaseModel):
    results: List[SearchResultItem]


class DeleteResponse(BaseModel):
    success: bool


class BatchDeleteRequest(BaseModel):
    ids: List[str]


class BatchDeleteResponse(BaseModel):
    results: List[bool]


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    version: str
    vector_provider: str
    embed_provider: str
    document_count: Optional[int] = None
