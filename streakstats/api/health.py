from fastapi import APIRouter

root_router = APIRouter(tags=["health"])


@root_router.get("/healthz")
def healthz():
    """Lightweight liveness check (no upstream calls)."""
    return {"status": "ok"}
