"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """Return application and catalog health status."""
    service = getattr(request.app.state, "inventory_service", None)
    if service is None:
        return {"status": "error", "catalog": "not loaded"}
    return {"status": "ok", "catalog": f"{service.registry.count()} items"}
