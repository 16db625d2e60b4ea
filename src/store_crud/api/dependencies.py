"""Dependency injection configuration for the example FastAPI app.

Uses FastAPI's app.state pattern for storing the store and handlers.

Pattern:
    - Store and handlers stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from store_crud.config import settings
from store_crud.handlers import CrudHandler
from store_crud.protocols import ObjectStore
from store_crud.repositories import InMemoryObjectStore, RedisObjectStore

from .notes import NOTES_BUCKET, Note

logger = logging.getLogger(__name__)


def build_store() -> ObjectStore:
    """Create the store selected by settings.store_backend."""
    if settings.uses_redis:
        return RedisObjectStore.create()
    return InMemoryObjectStore.create()


def get_store(request: Request) -> ObjectStore:
    """Dependency injection for the ObjectStore from app.state.

    Raises:
        RuntimeError: If the store is not initialized
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("ObjectStore not initialized. Check lifespan setup.")
    return store


def get_notes_handler(request: Request) -> CrudHandler:
    """Dependency injection for the notes CrudHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "notes_handler", None)
    if handler is None:
        raise RuntimeError("Notes handler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for the example app.

    Initializes the layers and stores them in app.state:
    1. Store (data access) - app.state.store, unless one was preset
    2. Handler (HTTP endpoints) - app.state.notes_handler
    """
    store = getattr(app.state, "store", None) or build_store()
    app.state.store = store
    app.state.notes_handler = CrudHandler(
        bucket=NOTES_BUCKET,
        store=store,
        record_model=Note,
    )

    logger.info("Store initialized: %s", type(store).__name__)
    logger.info("Store healthy: %s", store.health_check())

    yield

    del app.state.notes_handler
    del app.state.store
    logger.info("Store shut down")


# Type aliases for cleaner dependency injection
NotesHandlerDep = Annotated[CrudHandler, Depends(get_notes_handler)]
StoreDep = Annotated[ObjectStore, Depends(get_store)]
