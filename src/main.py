"""
Contract Playground Workspace

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.middleware.request_id import RequestIdMiddleware
from src.api.v1 import router as api_v1_router
from src.config import get_settings
from src.kernel.errors import WorkspaceError
from src.kernel.explorer import ExplorerLinks
from src.logging_config import configure_logging, get_logger
from src.orchestration.workspace import SessionRegistry
from src.remote import build_remote_collaborator
from src.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Opens the shared HTTP client for remote collaborators and the
    in-memory workspace registry; closes the client on shutdown.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    client = httpx.AsyncClient(timeout=settings.remote_timeout_seconds)
    remote = build_remote_collaborator(settings, client=client)
    app.state.remote = remote
    app.state.registry = SessionRegistry(
        remote,
        starting_credits=settings.starting_credits,
        explorer=ExplorerLinks(
            base_url=settings.explorer_base_url,
            network=settings.explorer_network,
        ),
    )
    configured = [name for name, url in remote.urls.items() if url]
    logger.info("Remote collaborators configured: %s", ", ".join(configured) or "none")

    yield

    logger.info("Shutting down...")
    await client.aclose()


app = FastAPI(
    title=settings.project_name,
    description="""
    Contract Playground Workspace

    Session-scoped workspace behind the Move contract editor.

    ## Features

    - **Documents**: named contract sources with their Move.toml manifest
    - **Accounts**: key identities with a single active account
    - **Credits**: metered audit / compile / deploy / prove operations
    - **Operation log**: append-only record of every result and failure
    - **Chat**: one-question-at-a-time Move assistant
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# add_middleware stacks innermost-first: CORS added last wraps everything
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _request_id_headers(request: Request) -> dict:
    req_id = getattr(request.state, "request_id", None)
    return {"X-Request-ID": req_id} if req_id else {}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
):
    """Handle request validation errors."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error", "errors": errors},
        headers=_request_id_headers(request),
    )


@app.exception_handler(WorkspaceError)
async def workspace_exception_handler(request: Request, exc: WorkspaceError):
    """Workspace errors that escaped a route are client errors, not crashes."""
    logger.warning("Workspace error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "type": type(exc).__name__},
        headers=_request_id_headers(request),
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    req_id = getattr(request.state, "request_id", None)
    if settings.debug:
        content = {"detail": str(exc), "type": type(exc).__name__, "request_id": req_id}
    else:
        content = {"detail": "Internal server error", "request_id": req_id}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_request_id_headers(request),
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Check application health."""
    registry = getattr(request.app.state, "registry", None)
    remote = getattr(request.app.state, "remote", None)
    urls = remote.urls if remote is not None else {}
    return HealthResponse(
        status="ok",
        version=settings.version,
        workspaces=len(registry) if registry is not None else 0,
        collaborators={name: bool(url) for name, url in urls.items()},
        assistant_configured=settings.openai_configured,
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
