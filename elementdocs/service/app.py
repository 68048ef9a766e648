"""FastAPI application entrypoint for elementdocs service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..analyzers.base import ResolutionError
from ..orchestrator import DocUpdate, Orchestrator


class UpdateRequest(BaseModel):
    path: str
    dry_run: bool = False


class DocResult(BaseModel):
    path: str
    changed: bool
    diff: Optional[str] = None


class UpdateResponse(BaseModel):
    status: str
    dry_run: bool
    docs: List[DocResult] = []


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing elementdocs operations."""
    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    app = FastAPI(title="elementdocs Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request so analyzer caches never outlive a run.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/update", response_model=UpdateResponse)
    async def update_docs(
        payload: UpdateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> UpdateResponse:
        def _run_update() -> List[DocUpdate]:
            return orchestrator.run_update(payload.path, dry_run=payload.dry_run)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:  # pragma: no cover
            results = _run_update()
        else:
            results = await loop.run_in_executor(None, _run_update)

        docs = [
            DocResult(path=str(result.path), changed=result.changed, diff=result.diff or None)
            for result in results
        ]
        status = "ok" if any(doc.changed for doc in docs) else "unchanged"
        return UpdateResponse(status=status, dry_run=payload.dry_run, docs=docs)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ResolutionError)
    async def resolution_error_handler(
        _: Any, exc: ResolutionError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
