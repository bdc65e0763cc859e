"""
Session endpoints.

Each request gets its own SessionBridge, so the hosted auth client's
session never leaks between callers. Responses carry the bridge state
(session, profile, role flags) plus any notices raised along the way.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, Field

from modules.auth.bridge import SessionBridge
from modules.auth.models import AuthErrorInfo, AuthResult, AuthState, ProfileFields
from modules.notifications.notices import Notice

from ..dependencies import get_session_bridge
from ..middleware.auth import AuthError, bearer_scheme

router = APIRouter()


class SignInRequest(BaseModel):
    """Email/password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class SignUpRequest(ProfileFields):
    """
    Email/password sign-up plus optional profile fields.

    The caller may set `role`. With AUTH_BACKEND=memory nothing else
    restricts it, so anyone can register an admin there; in Supabase mode
    the user_profiles RLS policies decide.
    """

    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionResponse(AuthState):
    """Bridge state returned by every session endpoint."""

    user_id: Optional[str] = None
    error: Optional[AuthErrorInfo] = None
    notices: list[Notice] = Field(default_factory=list)


def _respond(bridge: SessionBridge, result: Optional[AuthResult] = None) -> SessionResponse:
    return SessionResponse(
        **bridge.state.model_dump(),
        user_id=result.user_id if result else None,
        error=result.error if result else None,
        notices=bridge.notices.drain(),
    )


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    bridge: SessionBridge = Depends(get_session_bridge),
) -> SessionResponse:
    """
    Sign in with email and password.

    Returns 401 with a mapped {message, code} error on rejection.
    """
    await bridge.start()
    try:
        result = await bridge.sign_in(request.email, request.password)
        if not result.ok:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=result.error.model_dump(),
            )
        return _respond(bridge, result)
    finally:
        bridge.stop()


@router.post("/sign-up", response_model=SessionResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    bridge: SessionBridge = Depends(get_session_bridge),
) -> SessionResponse:
    """
    Create a credential and its profile.

    The role defaults to "tech" when omitted. Returns 400 with a mapped
    {message, code} error if either step fails.
    """
    fields = ProfileFields(**request.model_dump(exclude={"email", "password"}))
    await bridge.start()
    try:
        result = await bridge.sign_up(request.email, request.password, fields)
        if not result.ok:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={**result.error.model_dump(), "user_id": result.user_id},
            )
        return _respond(bridge, result)
    finally:
        bridge.stop()


@router.get("/session", response_model=SessionResponse)
async def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    bridge: SessionBridge = Depends(get_session_bridge),
) -> SessionResponse:
    """
    Restore the caller's session from its bearer token.

    An invalid or expired token yields a signed-out state, not an error.
    """
    try:
        if credentials is None:
            await bridge.start()
        else:
            await bridge.restore(credentials.credentials)
        return _respond(bridge)
    finally:
        bridge.stop()


@router.post("/sign-out", response_model=SessionResponse)
async def sign_out(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    bridge: SessionBridge = Depends(get_session_bridge),
) -> SessionResponse:
    """Revoke the caller's session. Local state is cleared regardless."""
    if credentials is None:
        raise AuthError("Missing authorization header")
    try:
        await bridge.restore(credentials.credentials)
        await bridge.sign_out()
        return _respond(bridge)
    finally:
        bridge.stop()
