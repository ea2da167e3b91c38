"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockfolio.api.routers import analysis_router, portfolios_router
from stockfolio.app_context import get_app_context
from stockfolio.config.logging_config import setup_logging
from stockfolio.config.settings import get_settings
from stockfolio.core.exceptions import AppError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    context = get_app_context()
    context.startup()
    yield
    # Shutdown
    context.shutdown()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Portfolio tracking with cached daily prices and trend analysis",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolios_router)
app.include_router(analysis_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=400,
        content={"error": exc.code.value, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
