"""Shared fixtures: stores and a tiny app that mounts a CrudHandler."""

import json
from collections.abc import Callable

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from store_crud.errors import StoreError
from store_crud.handlers import CrudHandler
from store_crud.repositories import InMemoryObjectStore


class FailingWriteStore(InMemoryObjectStore):
    """Memory store whose writes always fail."""

    def save(self, key: str, data: bytes, bucket: str) -> None:
        raise StoreError("disk full", bucket=bucket, key=key)

    def update(self, key: str, data: bytes, bucket: str) -> None:
        raise StoreError("disk full", bucket=bucket, key=key)

    def delete(self, key: str, bucket: str) -> None:
        raise StoreError("disk full", bucket=bucket, key=key)


class FailingReadStore(InMemoryObjectStore):
    """Memory store whose reads always fail."""

    def get(self, key: str, bucket: str):
        raise StoreError("connection reset", bucket=bucket, key=key)

    def get_all(self, count: int, skip: int, bucket: str):
        raise StoreError("connection reset", bucket=bucket)


def mount(handler: CrudHandler) -> FastAPI:
    """Expose every handler operation under /items."""
    app = FastAPI()

    @app.get("/items")
    async def list_items(request: Request):
        return await handler.get_all(request)

    @app.post("/items")
    async def create_item(request: Request):
        return await handler.post(request)

    @app.get("/items/{key}")
    async def get_item(key: str, request: Request):
        return await handler.get(request, key)

    @app.put("/items/{key}")
    async def replace_item(key: str, request: Request):
        return await handler.put(request, key)

    @app.patch("/items/{key}")
    async def update_item(key: str, request: Request):
        return await handler.patch(request, key)

    @app.delete("/items/{key}")
    async def delete_item(key: str, request: Request):
        return await handler.delete(request, key)

    return app


@pytest.fixture
def store():
    """Create an empty in-memory store."""
    return InMemoryObjectStore()


@pytest.fixture
def seeded_store(store):
    """Store with five records a..e in the items bucket."""
    for i, key in enumerate("abcde"):
        store.save(key, json.dumps({"n": i}).encode(), "items")
    return store


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Factory building a TestClient around a new CrudHandler."""

    def _make(store, **options) -> TestClient:
        handler = CrudHandler(bucket="items", store=store, **options)
        return TestClient(mount(handler))

    return _make
