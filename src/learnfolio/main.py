"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from learnfolio.app_context import get_app_context
from learnfolio.config.settings import get_settings
from learnfolio.config.logging_config import setup_logging
from learnfolio.api.routers import portfolio_router, watchlist_router, research_router
from learnfolio.core.exceptions import AppError

# Error code -> HTTP status; anything else is a 400
_STATUS_BY_CODE = {
    "NOT_FOUND": 404,
    "QUOTE_UNAVAILABLE": 502,
    "REFRESH_IN_PROGRESS": 409,
    "PERSISTENCE_ERROR": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    yield
    get_app_context().close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Practice stock portfolio, watchlist and savings planner",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(portfolio_router)
app.include_router(watchlist_router)
app.include_router(research_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_STATUS_BY_CODE.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
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
