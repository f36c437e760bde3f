"""REST API for analyzing content and scanning paths."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from baselinebuddy.errors import ConfigError, PathError, PatternError
from baselinebuddy.scanner.options import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    ScanOptions,
)

router = APIRouter(tags=["analysis"])


class AnalyzeRequest(BaseModel):
    path: str
    content: str
    baseline_level: str = "widely"
    enable_ai: bool = False


class ScanRequest(BaseModel):
    path: str
    include: list[str] = Field(default_factory=lambda: [*DEFAULT_INCLUDE_PATTERNS])
    exclude: list[str] = Field(default_factory=lambda: [*DEFAULT_EXCLUDE_PATTERNS])
    baseline_level: str = "widely"
    enable_ai: bool = False


def _bad_request(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(e)})


@router.post("/analyze")
def analyze(body: AnalyzeRequest, request: Request):
    try:
        options = ScanOptions(
            baseline_level=body.baseline_level, enable_ai=body.enable_ai
        )
    except (ConfigError, PatternError) as e:
        return _bad_request(e)
    issues = request.app.state.engine.analyze_file(body.path, body.content, options)
    return {"issues": [i.to_dict() for i in issues]}


@router.post("/scan")
def scan(body: ScanRequest, request: Request):
    try:
        options = ScanOptions(
            include_patterns=tuple(body.include),
            exclude_patterns=tuple(body.exclude),
            baseline_level=body.baseline_level,
            enable_ai=body.enable_ai,
            workers=request.app.state.config.workers,
            max_files=request.app.state.config.max_files,
        )
    except (ConfigError, PatternError) as e:
        return _bad_request(e)

    engine = request.app.state.engine
    try:
        if Path(body.path).is_dir():
            result = engine.scan_directory(body.path, options)
        else:
            result = engine.scan_file(body.path, options)
    except PathError as e:
        return JSONResponse(status_code=404, content={"detail": str(e)})
    return result.to_dict()