"""
FastAPI application for the semantic search service.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .auth import AuthGate, install_bearer_gate
from .documents import router as documents_router
from .schemas import HealthResponse
from ..core.config import (
    VERSION,
    Settings,
    load_settings,
    validate_settings,
    get_embedding_provider,
    get_vector_store,
)
from ..core.document_service import DocumentService
from ..core.repository import IDocumentRepository
from ..vector.repository import VectorBackedRepository
from ..util.logging import logger


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def create_app(settings: Optional[Settings] = None, repository: Optional[IDocumentRepository] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration, read from the environment when omitted
        repository: Repository override; built from the configured provider and store when omitted
    """
    if settings is None:
        settings = load_settings()

    for issue in validate_settings(settings):
        logger.warning(f"Configuration: {issue}")

    vector_store = None
    if repository is None:
        embedding_provider = get_embedding_provider(settings)
        dimension = embedding_provider.get_dimension() if settings.vector_provider == "faiss" else None
        vector_store = get_vector_store(settings, dimension)
        repository = VectorBackedRepository(embedding_provider, vector_store)

    app = FastAPI(
        title="Semantic Search API",
        version=VERSION,
        description="API for semantic search functionality",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.auth_gate = AuthGate(settings.api_key)
    app.state.document_service = DocumentService(repository)
    app.state.vector_store = vector_store

    # Registered before CORS so CORS wraps it and answers preflights
    install_bearer_gate(app, app.state.auth_gate, prefix="/v1")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(documents_router, prefix="/v1", tags=["documents"])

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(request: Request):
        """Check service health. Not gated."""
        store = request.app.state.vector_store
        document_count = None
        status = "healthy"
        if store is not None:
            try:
                document_count = store.count()
            except Exception as e:
                logger.error(f"Health check failed to count records: {e}")
                status = "unhealthy"

        return HealthResponse(
            status=status,
            version=VERSION,
            vector_provider=settings.vector_provider,
            embed_provider=settings.embed_provider,
            document_count=document_count
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed or wrongly typed request bodies get the same envelope as service validation errors."""
        message = _validation_message(exc)
        logger.log_operation("request.validate", "rejected", {"path": request.url.path, "error": message})
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}")
        content = {"error": "Internal server error"}
        if settings.debug:
            content["debug"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    logger.log_operation("app.startup", "success", {
        "version": VERSION,
        "vector_provider": settings.vector_provider,
        "embed_provider": settings.embed_provider,
        "auth_configured": bool(settings.api_key)
    })
    return app


app = create_app()
