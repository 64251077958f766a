"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from registry_api.api.error_handlers import register_error_handlers
from registry_api.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from registry_api.api.routes import metrics, organizations, users
from registry_api.core.config import Settings, get_settings
from registry_api.core.database import Database


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    # An unreachable database is logged, not fatal; requests will fail with 500.
    await database.ping()
    try:
        yield
    finally:
        await database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one Database instance."""
    settings = settings or get_settings()

    docs_enabled = settings.api_docs_enabled
    if docs_enabled is None:
        docs_enabled = settings.environment != "production"

    app = FastAPI(
        title="Registry API",
        description="Organization and user records",
        version="1.0.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)

    # Middleware is applied in reverse order of registration:
    # request logging is outermost so it sees every response.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(SecurityHeadersMiddleware, environment=settings.environment)
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    app.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(metrics.router, tags=["metrics"])

    return app


app = create_app()
