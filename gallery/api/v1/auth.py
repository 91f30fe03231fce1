# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin authentication endpoints."""

import logging
import secrets

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from gallery.api.deps import (
    SESSION_COOKIE,
    get_gallery_key,
    get_gallery_registry,
    get_optional_db,
)
from gallery.config import settings
from gallery.database import GalleryRegistry
from gallery.schemas.auth import AuthCheckResponse, LoginRequest
from gallery.schemas.common import OkResponse
from gallery.services import auth_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _cookie_path(request: Request) -> str:
    """Scope the session cookie to the gallery's API prefix."""
    return request.url.path.rsplit("/auth/", 1)[0]


def _invalid_password(key: str) -> HTTPException:
    logger.info(f"Failed admin login for gallery '{key}'")
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid password",
    )


@router.post("/login", response_model=OkResponse)
def login(
    data: LoginRequest,
    request: Request,
    response: Response,
    key: str = Depends(get_gallery_key),
    registry: GalleryRegistry = Depends(get_gallery_registry),
) -> OkResponse:
    """Log in with the admin password.

    This is the only place a new gallery is created: logging in to an
    unknown gallery with the configured password creates it.
    """
    if not registry.exists(key) and not secrets.compare_digest(
        data.password.encode("utf-8"), settings.password.encode("utf-8")
    ):
        raise _invalid_password(key)

    db = registry.get(key).session()
    try:
        if not auth_service.authenticate(db, data.password):
            raise _invalid_password(key)
        auth_service.cleanup_expired_sessions(db)
        token = auth_service.create_session(db)
    finally:
        db.close()

    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=False,  # Set to True in production
        samesite="lax",
        max_age=settings.session_max_age_seconds,
        path=_cookie_path(request),
    )
    return OkResponse()


@router.post("/logout", response_model=OkResponse)
def logout(
    request: Request,
    response: Response,
    db: Session | None = Depends(get_optional_db),
    session: str | None = Cookie(default=None),
) -> OkResponse:
    """End the current admin session."""
    if db is not None and session:
        auth_service.delete_session(db, session)
    response.delete_cookie(key=SESSION_COOKIE, path=_cookie_path(request))
    return OkResponse()


@router.get("/check", response_model=AuthCheckResponse)
def check_auth(
    db: Session | None = Depends(get_optional_db),
    session: str | None = Cookie(default=None),
) -> AuthCheckResponse:
    """Report whether the caller is logged in."""
    authenticated = (
        db is not None
        and bool(session)
        and auth_service.get_session(db, session) is not None
    )
    return AuthCheckResponse(authenticated=authenticated)
