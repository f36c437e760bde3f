"""REST API for liveness checks."""

from __future__ import annotations

from fastapi import APIRouter, Request

from baselinebuddy import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "version": __version__,
        "features": len(request.app.state.registry),
    }
