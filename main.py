from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, settings
from routers import json_home
from services.docs import DocsGenerator
from services.generator import JsonHomeGenerator
from services.scanner import FileResourceScanner, ResourceScanner, StaticResourceScanner
from services.source import JsonHomeSource

port = int(os.environ.get("FASTAPIPORT", 8000))

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# json-home source
# -----------------------------------------------------------------------------
def build_json_home_source(config: Settings) -> JsonHomeSource:
    docs_generator = DocsGenerator(
        base_uri=config.relation_type_base_uri,
        include_root=config.JSONHOME_DOC_ROOT_DIR,
        search_path=config.JSONHOME_DOC_SEARCH_PATH,
    )
    generator = JsonHomeGenerator(
        base_uri=config.JSONHOME_BASE_URI,
        relation_type_base_uri=config.relation_type_base_uri,
        docs_generator=docs_generator,
        strict=config.JSONHOME_STRICT,
    )
    scanner: ResourceScanner
    if config.JSONHOME_RESOURCES_FILE:
        scanner = FileResourceScanner(config.JSONHOME_RESOURCES_FILE)
    else:
        logger.warning("JSONHOME_RESOURCES_FILE is not set; serving an empty json-home document")
        scanner = StaticResourceScanner()
    return JsonHomeSource(generator, scanner, max_age=config.JSONHOME_CACHE_MAX_AGE)


def create_app(source: Optional[JsonHomeSource] = None, config: Settings = settings) -> FastAPI:
    app = FastAPI(
        title="json-home",
        description="Machine-readable discovery document of the resources of an HTTP API.",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.json_home_source = source if source is not None else build_json_home_source(config)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------
    app.include_router(router=json_home.router)

    return app


app = create_app()

# -----------------------------------------------------------------------------
# Entrypoint for `python main.py`
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
