from fastapi import APIRouter

from partyassets.config import settings

router = APIRouter(tags=["System"])


@router.get("/health")
def health():
    return {"status": "ok", "version": settings.app.version, "pr3import": settings.pr3import.enabled}
