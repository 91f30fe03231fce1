# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Token-based picture delivery endpoints.

These routes only serve galleries that already exist; an unknown gallery
is a 404 and leaves nothing behind on disk.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from gallery.api.deps import get_db, get_gallery, require_token
from gallery.database import Gallery
from gallery.exceptions import ForbiddenError, NotFoundError
from gallery.models import DeliveryMode
from gallery.schemas.photo import PhotoResponse
from gallery.services import (
    delivery_service,
    picture_service,
    storage_service,
    token_service,
)

router = APIRouter()


@router.get("/photo", response_model=PhotoResponse)
def get_photo(
    request: Request,
    token: str = Depends(require_token),
    mode: DeliveryMode = Query(DeliveryMode.SEQUENTIAL),
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> PhotoResponse:
    """Deliver the next picture for a token."""
    delivery = delivery_service.deliver_next(db, token, mode)

    url = request.url_for(
        "get_photo_file", gallery=gallery.key, picture_id=delivery.picture_id
    ).include_query_params(token=token)
    return PhotoResponse(
        id=delivery.picture_id,
        url=str(url),
        description=delivery.description,
        date=delivery.date,
        location=delivery.location,
    )


@router.get("/photo/file/{picture_id}")
def get_photo_file(
    picture_id: int,
    token: str = Depends(require_token),
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> FileResponse:
    """Serve picture bytes to any valid token holder."""
    if not token_service.token_exists(db, token):
        raise ForbiddenError()

    picture = picture_service.get_picture(db, picture_id)
    if picture is None:
        raise NotFoundError()
    path = storage_service.path_for(gallery.images_dir, picture.filename)
    if not path.is_file():
        raise NotFoundError()
    return FileResponse(path)
