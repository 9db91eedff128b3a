"""
Document and search endpoints. Mounted under /v1 behind the bearer gate middleware.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .schemas import (
    DocumentRequest,
    DocumentResponse,
    IndexResponse,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    DeleteResponse,
    BatchDeleteRequest,
    BatchDeleteResponse,
    ErrorResponse,
)
from ..core.document_service import DocumentService
from ..core.errors import SemanticSearchError
from ..util.logging import logger

router = APIRouter()

NOT_FOUND = "Document not found"


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.document_service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/documents",
    response_model=IndexResponse,
    responses={400: {"model": ErrorResponse}},
)
def index_document(body: DocumentRequest, service: DocumentService = Depends(get_document_service)):
    """Index a document, generating an id when none is given."""
    try:
        doc_id = service.index_document(body.model_dump(exclude_none=True))
    except SemanticSearchError as e:
        logger.log_document_operation("index", body.id or "-", {"error": str(e)}, status="failed")
        return _error(400, str(e))

    return IndexResponse(id=doc_id)


@router.post(
    "/documents/delete",
    response_model=BatchDeleteResponse,
    responses={400: {"model": ErrorResponse}},
)
def delete_documents(body: BatchDeleteRequest, service: DocumentService = Depends(get_document_service)):
    """Delete several documents in one store call."""
    try:
        results = service.delete_documents(body.ids)
    except SemanticSearchError as e:
        return _error(400, str(e))

    return BatchDeleteResponse(results=results)


@router.get(
    "/documents/{doc_id}",
    response_model=DocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_document(doc_id: str, service: DocumentService = Depends(get_document_service)):
    try:
        document = service.get_document(doc_id)
    except SemanticSearchError as e:
        logger.log_document_operation("get", doc_id, {"error": str(e)}, status="failed")
        return _error(404, str(e))

    if document is None:
        return _error(404, NOT_FOUND)

    return DocumentResponse(**document.to_dict())


@router.delete(
    "/documents/{doc_id}",
    response_model=DeleteResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_document(doc_id: str, service: DocumentService = Depends(get_document_service)):
    try:
        deleted = service.delete_document(doc_id)
    except SemanticSearchError as e:
        return _error(400, str(e))

    if not deleted:
        return _error(404, NOT_FOUND)

    return DeleteResponse(success=True)


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}},
)
def search_documents(body: SearchRequest, service: DocumentService = Depends(get_document_service)):
    """Similarity search. Results keep the store's order and scores."""
    try:
        results = service.search_documents(body.query, body.limit)
    except SemanticSearchError as e:
        logger.log_operation("document.search", "failed", {"error": str(e)})
        return _error(400, str(e))

    return SearchResponse(results=[
        SearchResultItem(
            document=DocumentResponse(**result.document.to_dict()),
            score=result.score
        )
        for result in results
    ])
