"""
Webforge - AI-assisted web project builder

FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .database import init_db, close_db
from .config import settings
from .errors import register_exception_handlers
from .api import (
    sessions_router,
    projects_router,
    files_router,
    versions_router,
    collaborations_router,
    deployments_router,
    templates_router,
    chat_router,
)
from .tracer import setup_follow_through_logging

# Configure logging based on mode
if settings.debug:
    log_level = logging.DEBUG
elif settings.follow_through:
    log_level = logging.WARNING  # Suppress normal logs, let tracer handle output
else:
    log_level = logging.INFO

logging.basicConfig(
    level=log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Quiet down noisy loggers when not in debug mode
if not settings.debug:
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# Setup follow-through tracing
setup_follow_through_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Webforge...")

    await init_db()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down Webforge...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title="Webforge",
    description="""
    Backend for an AI-assisted web project builder.

    ## Features
    - **Sessions**: Anonymous browser sessions own projects
    - **Projects**: Create from scratch or from a template
    - **Files**: Path-unique project files with soft delete
    - **Versions**: Change log with rollback of any recorded version
    - **Sharing**: Collaborator roles and deployment records
    - **Assistant**: Chat log tied to sessions and projects
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(sessions_router)
app.include_router(projects_router)
app.include_router(files_router)
app.include_router(versions_router)
app.include_router(collaborations_router)
app.include_router(deployments_router)
app.include_router(templates_router)
app.include_router(chat_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Webforge",
        "version": "1.0.0",
        "description": "AI-assisted web project builder",
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
