"""Entry point for the Registry service."""

import time
import uuid
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.constants import REQUEST_ID_HEADER
from common.logging_config import setup_logging
from registry import config, database
from registry.exceptions import (
    DuplicateEntryError,
    InvalidIdentityError,
    InvalidInputError,
    InvariantViolation,
    NotFoundError,
    RegistryException,
    UnauthorizedError,
    UnsupportedOperationError,
)
from registry.file_registry import FileRegistry
from registry.hashing import Sha256HashFunction
from registry.identity import BearerIdentityProvider, IdentityProvider, TokenIdentityProvider
from registry.repositories import DescriptorRepository
from registry.routes import descriptor_router
from registry.schemas import ErrorResponse

logger = setup_logging('registry')


def build_registry(database_path: Optional[str] = None) -> FileRegistry:
    """
    Build a registry, backed by SQLite when a database path is given.
    """
    if database_path is None:
        logger.info("No database configured - registry state is in-memory only")
        return FileRegistry(Sha256HashFunction())

    database.configure_database(database_path)
    database.init_database()
    logger.info(f"Database initialized at {database_path}")
    return FileRegistry(Sha256HashFunction(), repository=DescriptorRepository())


def build_identity_provider(raw_tokens: str) -> IdentityProvider:
    tokens = config.parse_identity_tokens(raw_tokens)
    if tokens:
        logger.info(f"Resolving identities from a table of {len(tokens)} tokens")
        return TokenIdentityProvider(tokens)
    return BearerIdentityProvider()


def _error_response(request: Request, exc: Exception, status_code: int, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"{type(exc).__name__}: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code).model_dump()
    )


def create_app(
    registry: Optional[FileRegistry] = None,
    identity_provider: Optional[IdentityProvider] = None
) -> FastAPI:
    """
    Create the HTTP application around a registry instance.

    Args:
        registry: Registry to serve; built from configuration when omitted
        identity_provider: Resolves Authorization headers; built from configuration when omitted
    """
    app = FastAPI(
        title="File Descriptor Registry",
        description="Content-addressed registry of immutable file descriptors",
        version="1.0.0"
    )

    app.state.registry = registry if registry is not None else build_registry(config.DATABASE_PATH)
    app.state.identity_provider = (
        identity_provider if identity_provider is not None
        else build_identity_provider(config.IDENTITY_TOKENS)
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Middleware to log all HTTP requests and responses.
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

        response = await call_next(request)

        duration = time.time() - start_time
        identity = getattr(request.state, 'identity', None)
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s "
            f"[request_id={request_id}] [identity={identity or 'anonymous'}]"
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT")

    @app.exception_handler(InvalidIdentityError)
    async def invalid_identity_handler(request: Request, exc: InvalidIdentityError):
        return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "INVALID_IDENTITY")

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return _error_response(request, exc, status.HTTP_403_FORBIDDEN, "UNAUTHORIZED")

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "NOT_FOUND")

    @app.exception_handler(UnsupportedOperationError)
    async def unsupported_operation_handler(request: Request, exc: UnsupportedOperationError):
        return _error_response(request, exc, status.HTTP_405_METHOD_NOT_ALLOWED, "UNSUPPORTED_OPERATION")

    @app.exception_handler(DuplicateEntryError)
    async def duplicate_entry_handler(request: Request, exc: DuplicateEntryError):
        return _error_response(request, exc, status.HTTP_409_CONFLICT, "DUPLICATE_ENTRY")

    @app.exception_handler(RegistryException)
    async def registry_exception_handler(request: Request, exc: RegistryException):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.error(
            f"Registry exception: {exc} [request_id={request_id}] path={request.url.path}",
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "code": "INTERNAL_ERROR"}
        )

    @app.exception_handler(InvariantViolation)
    async def invariant_violation_handler(request: Request, exc: InvariantViolation):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.critical(
            f"Invariant violation: {exc} [request_id={request_id}] path={request.url.path}",
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "code": "INVARIANT_VIOLATION"}
        )

    app.include_router(descriptor_router)

    @app.get("/")
    async def root(request: Request):
        """
        Root endpoint for health check.
        """
        return {
            "message": "File Descriptor Registry API",
            "status": "running",
            "entries": len(request.app.state.registry)
        }

    return app


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "registry.main:create_app",
        factory=True,
        host=config.REGISTRY_HOST,
        port=config.REGISTRY_PORT
    )


if __name__ == "__main__":
    main()
