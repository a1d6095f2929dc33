from datetime import datetime, timezone

from fastapi import APIRouter

from recipe_planner.config import settings

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.env,
    }
