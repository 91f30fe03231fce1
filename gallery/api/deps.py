# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from gallery.database import Gallery, GalleryRegistry
from gallery.exceptions import InvalidError
from gallery.models import AdminSession
from gallery.services import auth_service

# Gallery keys become directory names, so keep them to a safe alphabet
GALLERY_KEY_PATTERN = r"^[a-z0-9][a-z0-9_-]{0,63}$"
SESSION_COOKIE = "session"


def get_gallery_registry() -> GalleryRegistry:
    """Get the process-wide gallery registry."""
    return GalleryRegistry.get_instance()


def get_gallery_key(
    gallery: Annotated[str, Path(pattern=GALLERY_KEY_PATTERN)],
) -> str:
    """Gallery key from the URL."""
    return gallery


def get_gallery(
    key: str = Depends(get_gallery_key),
    registry: GalleryRegistry = Depends(get_gallery_registry),
) -> Gallery:
    """Resolve an existing gallery named in the URL.

    Galleries are never created here; see the login endpoint.
    """
    return registry.get(key, create=False)


def get_db(gallery: Gallery = Depends(get_gallery)) -> Generator[Session]:
    """Get a database session for the requested gallery."""
    db = gallery.session()
    try:
        yield db
    finally:
        db.close()


def get_optional_db(
    key: str = Depends(get_gallery_key),
    registry: GalleryRegistry = Depends(get_gallery_registry),
) -> Generator[Session | None]:
    """Get a database session if the gallery exists, else None."""
    if not registry.exists(key):
        yield None
        return
    db = registry.get(key, create=False).session()
    try:
        yield db
    finally:
        db.close()


def get_current_admin(
    db: Session | None = Depends(get_optional_db),
    session: str | None = Cookie(default=None),
) -> AdminSession:
    """Get the admin session from the session cookie."""
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    session_obj = auth_service.get_session(db, session) if db is not None else None
    if not session_obj:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
        )
    return session_obj


def require_token(token: str | None = Query(None)) -> str:
    """Token query parameter of the token holder routes."""
    if not token:
        raise InvalidError("token required")
    return token
