"""
dictagger API — Main Application

POST /tag         — Tag text (one tag sequence per line)
POST /tag/batch   — Tag several texts
GET  /dictionary  — Loaded dictionary summary
GET  /health      — Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from dictagger import __version__
from dictagger.config import settings
from dictagger.errors import DictaggerError
from dictagger.logging import setup_logging, get_logger
from dictagger.schemes import Scheme, chunks
from dictagger.tagger import Tagger, build_tagger, iter_lines
from dictagger.schemas.tag import (
    TagRequest,
    TagBatchRequest,
    TagResponse,
    TagBatchResponse,
    DictionaryResponse,
    HealthResponse,
)

logger = get_logger("api")


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and try to build the tagger up front."""
    setup_logging()
    try:
        get_tagger()
    except HTTPException:
        logger.warning("dictagger API starting without a dictionary; /tag will return 503")
    logger.info("dictagger API starting", extra={"path": settings.DICTIONARIES or None})
    yield
    logger.info("dictagger API shutting down")


app = FastAPI(
    title="dictagger API",
    description="Dictionary-based IOB / BIOES chunk tagger",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — return structured error, don't leak internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The text could not be tagged."},
    )


# Lazy tagger: the automaton is built once and shared by every request
_tagger: Optional[Tagger] = None


def get_tagger() -> Tagger:
    global _tagger
    if _tagger is None:
        try:
            _tagger = build_tagger(settings)
        except DictaggerError as e:
            raise HTTPException(503, f"Tagger unavailable: {e}")
    return _tagger


def _tag_text(tagger: Tagger, request: TagRequest) -> dict:
    scheme = Scheme.parse(request.format or settings.FORMAT)
    lines = []
    tag_count = 0
    chunk_count = 0
    for line in iter_lines(request.text):
        tags = tagger.annotate(line, scheme)
        tag_count += len(tags)
        chunk_count += len(chunks(tags))
        lines.append({
            "text": line,
            "tags": [
                {"token": t.text, "tag": t.tag, "label": t.label, "start": t.start, "end": t.end}
                for t in tags
            ],
        })
    return {
        "format": scheme.value,
        "lines": lines,
        "tag_count": tag_count,
        "chunk_count": chunk_count,
    }


# ============================================================
# ROUTES
# ============================================================

@app.post("/tag", response_model=TagResponse)
async def tag_text(request: TagRequest, tagger: Tagger = Depends(get_tagger)):
    """Tag text against the loaded dictionary."""
    start = time.time()
    result = _tag_text(tagger, request)
    logger.info(
        "Text tagged",
        extra={
            "scheme": result["format"],
            "lines": len(result["lines"]),
            "tags": result["tag_count"],
            "duration_ms": round((time.time() - start) * 1000, 1),
        },
    )
    return result


@app.post("/tag/batch", response_model=TagBatchResponse)
async def tag_batch(request: TagBatchRequest, tagger: Tagger = Depends(get_tagger)):
    """Tag up to 100 texts in one call."""
    results = [_tag_text(tagger, item) for item in request.items]
    return {"results": results, "total": len(results)}


@app.get("/dictionary", response_model=DictionaryResponse)
async def get_dictionary(tagger: Tagger = Depends(get_tagger)):
    """Entry count and classes of the loaded dictionary."""
    return {
        "entries": len(tagger.dictionary),
        "classes": tagger.dictionary.classes(),
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check — reports 'degraded' when no dictionary could be loaded."""
    try:
        tagger = get_tagger()
    except HTTPException:
        tagger = None

    return {
        "status": "operational" if tagger else "degraded",
        "version": __version__,
        "dictionary_loaded": tagger is not None,
        "dictionary_entries": len(tagger.dictionary) if tagger else 0,
        "case_sensitive": tagger.case_sensitive if tagger else settings.CASE_SENSITIVE,
        "word_matching": tagger.word_matching if tagger else settings.WORD_MATCHING,
        "match_kind": tagger.match_kind.value if tagger else settings.MATCH_KIND,
        "default_format": settings.FORMAT,
    }


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response
