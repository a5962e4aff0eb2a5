"""Comparison API endpoints"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse

from models.compare import (
    CompareRequest,
    CompareResponse,
    SearchRequest,
    SearchResponse,
)
from services.config_manager import ConfigManager
from services.diff_engine import DiffEngine
from services.report import render_html_report, search_hits

logger = logging.getLogger(__name__)

router = APIRouter()


def build_engine(request: CompareRequest | None = None) -> DiffEngine:
    """Diff engine from persisted settings, overridden by per-request options"""
    settings = ConfigManager.get_instance().get_diff_settings()
    if request is not None and request.pairing is not None:
        settings = settings.model_copy(update={"pairing": request.pairing})
    return DiffEngine(settings)


def run_comparison(request: CompareRequest) -> CompareResponse:
    """Compare two texts, turning engine failures into a 422"""
    engine = build_engine(request)
    try:
        result = engine.compare(request.old_text, request.new_text, request.collapse_unchanged)
    except (TypeError, ValueError) as e:
        logger.exception("[Compare] Could not compare %s and %s", request.old_name, request.new_name)
        raise HTTPException(status_code=422, detail=f"Could not compare files: {e}")

    logger.info(
        "[Compare] %s vs %s: +%d -%d ~%d",
        request.old_name,
        request.new_name,
        result.stats.added,
        result.stats.removed,
        result.stats.modified,
    )
    return CompareResponse(old_name=request.old_name, new_name=request.new_name, **dict(result))


async def read_text(upload: UploadFile) -> str:
    """Read an uploaded file as UTF-8 text"""
    raw = await upload.read()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("[Compare] %s is not valid UTF-8: %s", upload.filename, e)
        raise HTTPException(status_code=422, detail=f"Could not compare files: {upload.filename} is not UTF-8 text")


@router.post("", response_model=CompareResponse)
def compare_texts(request: CompareRequest) -> CompareResponse:
    """Compare two texts and return every view of the result"""
    return run_comparison(request)


@router.post("/upload", response_model=CompareResponse)
async def compare_uploads(
    old_file: UploadFile = File(...),
    new_file: UploadFile = File(...),
    collapse_unchanged: bool | None = Form(None),
) -> CompareResponse:
    """Compare two uploaded text files"""
    request = CompareRequest(
        old_text=await read_text(old_file),
        new_text=await read_text(new_file),
        old_name=old_file.filename or "version1.txt",
        new_name=new_file.filename or "version2.txt",
        collapse_unchanged=collapse_unchanged,
    )
    return run_comparison(request)


@router.post("/search", response_model=SearchResponse)
def search_comparison(request: SearchRequest) -> SearchResponse:
    """Find the records of a comparison that contain a term"""
    records = build_engine().compute_diff(request.old_text, request.new_text)
    hits = search_hits(records, request.term)
    return SearchResponse(
        term=request.term,
        matches=[hit.index for hit in hits],
        total=len(hits),
        hits=hits,
    )


@router.post("/export", response_class=HTMLResponse)
def export_report(request: CompareRequest) -> HTMLResponse:
    """Export the inline comparison as a standalone HTML document"""
    records = run_comparison(request).records
    html = render_html_report(records, request.old_name, request.new_name)
    filename = f"diff-report-{int(time.time() * 1000)}.html"
    return HTMLResponse(
        content=html,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
