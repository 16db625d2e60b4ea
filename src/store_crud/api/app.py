from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from store_crud.config import settings
from store_crud.logging_config import configure_logging

from .dependencies import NotesHandlerDep, StoreDep, lifespan


def create_app() -> FastAPI:
    """Build the example service exposing the ``notes`` resource."""
    app = FastAPI(
        title="Store CRUD API",
        description="CRUD handlers over a pluggable object store",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Store CRUD API",
            "version": "0.1.0",
            "backend": settings.store_backend,
            "endpoints": {
                "notes": "/notes",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    async def health(store: StoreDep) -> dict[str, Any]:
        """Health check endpoint."""
        if not store.health_check():
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Store is not reachable",
            )
        return {"status": "healthy", "store": type(store).__name__}

    @app.get("/notes")
    async def list_notes(request: Request, handler: NotesHandlerDep) -> JSONResponse:
        return await handler.get_all(request)

    @app.post("/notes")
    async def create_note(request: Request, handler: NotesHandlerDep) -> JSONResponse:
        return await handler.post(request)

    @app.get("/notes/{key}")
    async def get_note(key: str, request: Request, handler: NotesHandlerDep) -> JSONResponse:
        return await handler.get(request, key)

    @app.put("/notes/{key}")
    async def replace_note(key: str, request: Request, handler: NotesHandlerDep) -> JSONResponse:
        return await handler.put(request, key)

    @app.patch("/notes/{key}")
    async def update_note(key: str, request: Request, handler: NotesHandlerDep) -> JSONResponse:
        return await handler.patch(request, key)

    @app.delete("/notes/{key}")
    async def delete_note(key: str, request: Request, handler: NotesHandlerDep) -> JSONResponse:
        return await handler.delete(request, key)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(
        "store_crud.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
