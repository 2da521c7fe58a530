"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import items
from db import init_db
from repositories import CountersRepository, ItemsRepository
from repositories.base import CounterStore, ItemStore
from services.catalog import Catalog
from services.id_allocator import IdAllocator
from settings import settings

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def create_app(
    item_store: Optional[ItemStore] = None,
    counter_store: Optional[CounterStore] = None,
    flush_on_shutdown: Optional[bool] = None,
) -> FastAPI:
    """
    Build the API. Without explicit stores the SQLAlchemy repositories on the
    configured database are used and their tables are created at startup.
    """
    _configure_logging()
    if flush_on_shutdown is None:
        flush_on_shutdown = settings.FLUSH_ON_SHUTDOWN

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if item_store is None or counter_store is None:
            init_db()
        store = item_store or ItemsRepository()
        allocator = IdAllocator(counter_store or CountersRepository())
        allocator.load()
        # A store failure here aborts startup: there is no catalog to serve
        app.state.catalog = Catalog.load(store)
        app.state.allocator = allocator
        yield
        if flush_on_shutdown:
            app.state.catalog.flush()

    app = FastAPI(
        title="Library Catalog API",
        description="API for cataloging books, discs, periodicals and interactive media",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(items.router, prefix="/items", tags=["items"])

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "Library Catalog API"}

    @app.get("/health")
    async def health():
        return {"status": "healthy", "items": len(app.state.catalog)}

    return app


app = create_app()
