from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", include_in_schema=False)
async def health_check(request: Request) -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy", "service": request.app.title}
