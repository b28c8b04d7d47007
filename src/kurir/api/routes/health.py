"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/ai-gateway", status_code=status.HTTP_200_OK)
def health_ai_gateway() -> dict:
    """Report whether the route-ordering gateway has credentials."""
    from ...config import settings
    from ...services.routing.gateway import check_configured

    configured = check_configured()
    return {
        "service": "ai-gateway",
        "configured": configured,
        "model": settings.route_model,
        "message": None if configured else "Set KURIR_AI_GATEWAY_API_KEY to enable route optimization.",
    }


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set KURIR_SUPABASE_URL and KURIR_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table("pricing_config").select("id", count="exact").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "message": "Database connected.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
