"""
System/health API routes.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from userauth import __version__
from userauth.web.schemas import success_response

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return JSONResponse(
        success_response(data={"status": "healthy", "version": __version__}, message="Service is running")
    )
