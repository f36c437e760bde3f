"""REST API for the feature registry."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from baselinebuddy.registry.models import BaselineStatus, FeatureGroup

router = APIRouter(tags=["features"])


@router.get("/features")
async def list_features(
    request: Request,
    group: str | None = None,
    status: str | None = None,
    search: str | None = None,
):
    registry = request.app.state.registry
    records = registry.search(search) if search else list(registry)
    try:
        if group:
            wanted_group = FeatureGroup(group)
            records = [r for r in records if r.group is wanted_group]
        if status:
            wanted_status = BaselineStatus.parse(status)
            records = [r for r in records if r.status is wanted_status]
    except ValueError as e:
        return JSONResponse(status_code=400, content={"detail": str(e)})
    return [registry.feature_info(r.id) for r in records]


@router.get("/features/{feature_id}")
async def get_feature(feature_id: str, request: Request):
    info = request.app.state.registry.feature_info(feature_id)
    if not info:
        return JSONResponse(
            status_code=404,
            content={"detail": "Feature not found"},
        )
    return info
