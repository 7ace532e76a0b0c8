"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, posts
from src.config import get_settings
from src.database import init_db
from src.errors import register_error_handlers
from src.schemas.common import ApiResponse

# Missing or weak JWT_SECRET fails here, before the app exists
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # An unreachable database aborts startup here
    init_db()
    logger.info(f"Posts API started ({settings.environment})")
    yield
    logger.info("Posts API stopped")


app = FastAPI(
    title="Posts API",
    description="Token-authenticated posts with per-owner write access",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.3f}s"
    )
    return response


# Register routers
app.include_router(auth.router)
app.include_router(posts.router)


@app.get("/", response_model=ApiResponse[None])
async def root():
    """Welcome message."""
    return ApiResponse(message="Welcome to the Posts API")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
