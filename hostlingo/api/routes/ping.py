"""Liveness endpoint reporting the deployment it runs in."""

from fastapi import APIRouter

from hostlingo.core.config import settings

router = APIRouter(tags=["diagnostics"])


@router.get("/ping")
async def ping() -> dict:
    return {
        "ok": True,
        "route": "/api/ping",
        "env": settings.app_env,
        "commit": settings.git_commit_sha,
    }
