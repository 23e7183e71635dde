# news_autocompleter/api/server.py
"""
HTTP surface of the suggestion engine.

Routes:
  GET /api/suggest?q=...  -> JSON array of strings (always 200 unless the merge itself breaks)
  GET /api/health         -> {"status": "OK", "timestamp": ..., "uptime": ...}
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from news_autocompleter.core.merger import SuggestionMerger
from news_autocompleter.core.title_store import MongoTitleStore
from news_autocompleter.core.trie import DictionaryIndex
from news_autocompleter.utils.config_manager import Config
from news_autocompleter.utils.logger_utils import log


def build_merger(cfg: Config) -> SuggestionMerger:
    """Build the dictionary and open the title store described by `cfg`."""
    index = DictionaryIndex.from_file(cfg["word_list"])

    store = None
    try:
        store = MongoTitleStore.from_uri(
            cfg["mongo_uri"],
            collection=cfg["title_collection"],
            field=cfg["title_field"],
            timeout_s=cfg["title_timeout_s"],
        )
    except (PyMongoError, ValueError) as e:
        log.error(f"[server] title store unavailable, dictionary only: {e}")

    return SuggestionMerger.from_config(cfg, index, store)


def create_app(cfg: Optional[Config] = None, merger: Optional[SuggestionMerger] = None) -> FastAPI:
    cfg = cfg or Config()
    log.level = cfg["log_level"]
    if merger is None:
        merger = build_merger(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.merger.close()

    app = FastAPI(title="News Autocompleter", lifespan=lifespan)
    app.state.merger = merger
    app.state.started_at = time.time()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg["cors_origins"],
        allow_origin_regex=cfg["cors_origin_regex"] or None,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/suggest", response_model=List[str])
    async def suggest(q: str = ""):
        try:
            return await app.state.merger.asuggest(q)
        except Exception as e:
            log.error(f"[server] suggestion error for {q!r}: {e!r}")
            return JSONResponse(
                status_code=500,
                content={"message": "Server error fetching suggestions"},
            )

    @app.get("/api/health")
    async def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.time() - app.state.started_at, 3),
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"message": "API endpoint not found"})
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        log.error(f"[server] unhandled error on {request.url.path}: {exc!r}")
        return JSONResponse(status_code=500, content={"message": "Something went wrong!"})

    return app
