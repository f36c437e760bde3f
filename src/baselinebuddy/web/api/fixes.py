"""REST API for proposing and applying auto-fixes."""

from __future__ import annotations

from pathlib import PurePath

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter(tags=["fixes"])


class ProposeRequest(BaseModel):
    path: str
    content: str


class ApplyRequest(BaseModel):
    path: str
    source: str
    line: int
    feature_id: str
    fix_id: str | None = None


@router.post("/fixes")
def propose_fixes(body: ProposeRequest, request: Request):
    proposals = request.app.state.fix_engine.analyze_and_fix(body.content, body.path)
    return [p.to_dict() for p in proposals]


@router.post("/fixes/apply")
def apply_fix(body: ApplyRequest, request: Request):
    engine = request.app.state.fix_engine
    file_type = PurePath(body.path).suffix
    candidates = engine.database.fixes(body.feature_id, file_type)
    if body.fix_id:
        candidates = tuple(f for f in candidates if f.id == body.fix_id)
    fix = engine.select_best_fix(candidates)
    if fix is None:
        return JSONResponse(
            status_code=404,
            content={"detail": "No fix available"},
        )
    source = engine.apply_fix(body.source, fix, body.line)
    return {
        "changed": source != body.source,
        "source": source,
        "fix": fix.to_dict(),
    }
