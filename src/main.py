"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, thoughts, users
from src.api.exception_handlers import setup_exception_handlers
from src.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Happy Thoughts API starting ({settings.environment})")
    yield
    logger.info("Happy Thoughts API shutting down")


app = FastAPI(
    title="Happy Thoughts API",
    description="Post short thoughts, like them, and manage user accounts",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(thoughts.router)
app.include_router(users.router)


@app.get("/")
async def list_routes(request: Request):
    """List every API endpoint with its methods."""
    # Built from the OpenAPI paths so routes of included routers are listed too
    paths = request.app.openapi()["paths"]
    return [
        {"path": path, "methods": sorted(method.upper() for method in operations)}
        for path, operations in paths.items()
    ]


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
