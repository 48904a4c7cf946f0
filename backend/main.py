from contextlib import asynccontextmanager
import logging
import os
import sys
from pathlib import Path

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from dotenv import load_dotenv

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

load_dotenv(Path(ROOT_DIR) / ".env")

from backend import config
from backend.schemas import (
    CompositionListResponse,
    CompositionResponse,
    ErrorResponse,
    HealthResponse,
    RescanResponse,
)
from backend.services.catalog_service import CatalogScanError, CatalogService
from catalog.folder_scanner import FolderScanner
from storage.catalog_store import CatalogStore

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def create_app(audio_dir: str | None = None, base_url: str | None = None) -> FastAPI:
    audio_dir = audio_dir or config.AUDIO_DIR
    base_url = base_url or config.PUBLIC_BASE_URL

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = CatalogStore()
        scanner = FolderScanner(
            audio_dir=audio_dir,
            base_url=base_url,
            audio_extension=config.AUDIO_EXTENSION,
            marker_extension=config.MARKER_EXTENSION,
        )
        catalog = CatalogService(store=store, scanner=scanner, default_limit=config.DEFAULT_PAGE_LIMIT)

        app.state.store = store
        app.state.catalog = catalog

        catalog.load_initial()
        logger.info("Serving audio from %s at %s/audio", audio_dir, base_url)
        yield

    app = FastAPI(title="Composition Catalog API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.mount("/audio", StaticFiles(directory=audio_dir, check_dir=False), name="audio")

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return "<h1>Server is running</h1>"

    @app.get("/api/health", response_model=HealthResponse)
    def health(request: Request) -> HealthResponse:
        store = request.app.state.store
        return HealthResponse(
            ok=True,
            compositions=len(store.snapshot()),
            scans=store.version,
            last_scanned_at=store.last_scanned_at,
        )

    @app.get("/api/compositions", response_model=CompositionListResponse)
    def list_compositions(
        request: Request,
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=config.DEFAULT_PAGE_LIMIT, ge=1),
    ) -> CompositionListResponse:
        result = request.app.state.catalog.list_compositions(page=page, limit=limit)
        return CompositionListResponse.from_page(result)

    @app.get(
        "/api/compositions/{composition_id}",
        response_model=CompositionResponse,
        responses={404: {"model": ErrorResponse}},
    )
    def get_composition(request: Request, composition_id: int):
        composition = request.app.state.catalog.get_composition(composition_id)
        if composition is None:
            return JSONResponse(status_code=404, content={"error": "Composition not found"})
        return CompositionResponse.from_composition(composition)

    @app.post(
        "/api/rescan",
        response_model=RescanResponse,
        responses={500: {"model": ErrorResponse}},
    )
    def rescan(request: Request):
        try:
            count = request.app.state.catalog.rescan()
        except CatalogScanError:
            logger.exception("Rescan failed")
            return JSONResponse(status_code=500, content={"error": "Failed to rescan audio folder"})

        return RescanResponse(message="Audio folder rescanned successfully", count=count)

    return app


app = create_app()
