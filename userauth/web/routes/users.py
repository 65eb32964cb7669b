"""
User profile routes. All of them require a session token.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from userauth.auth.service import AuthContext
from userauth.web.dependencies import authorize
from userauth.web.schemas import SessionUser

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/current", response_model=SessionUser)
async def current_user(context: AuthContext = Depends(authorize)):
    """Profile of the authorized user."""
    return JSONResponse(
        {
            "email": context.user.email,
            "subscription": context.user.subscription,
        }
    )
