# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin picture endpoints."""

import logging
import math

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from gallery.api.deps import get_current_admin, get_db, get_gallery
from gallery.config import settings
from gallery.database import Gallery
from gallery.exceptions import InvalidError, NotFoundError
from gallery.models import Picture
from gallery.schemas.common import OkResponse
from gallery.schemas.picture import (
    PictureListResponse,
    PictureResponse,
    PictureUpdate,
    UploadResponse,
)
from gallery.services import ingest_service, picture_service, storage_service

router = APIRouter(dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


def build_picture_response(
    request: Request, gallery: Gallery, picture: Picture
) -> PictureResponse:
    """Build the admin view of a picture."""
    return PictureResponse(
        id=picture.id,
        filename=picture.filename,
        description=picture.description,
        date=picture.date,
        location=picture.location,
        tags=picture.tag_names,
        url=request.url_for(
            "get_picture_file", gallery=gallery.key, picture_id=picture.id
        ).path,
        created_at=picture.created_at,
    )


def _get_picture_or_404(db: Session, picture_id: int) -> Picture:
    picture = picture_service.get_picture(db, picture_id)
    if picture is None:
        raise NotFoundError(f"Picture {picture_id} not found")
    return picture


@router.get("", response_model=PictureListResponse)
def list_pictures(
    request: Request,
    tag: str | None = None,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> PictureListResponse:
    """List pictures page by page, optionally filtered by tag."""
    page = max(1, page or 1)
    limit = min(settings.max_page_limit, max(1, limit or settings.default_page_limit))
    offset = (page - 1) * limit

    total = picture_service.count_pictures(db, tag)
    pictures = picture_service.list_pictures(db, tag, limit, offset)
    return PictureListResponse(
        pictures=[build_picture_response(request, gallery, p) for p in pictures],
        total=total,
        page=page,
        limit=limit,
        pages=math.ceil(total / limit),
    )


@router.post("/upload", response_model=UploadResponse)
def upload_pictures(
    images: list[UploadFile] = File(...),
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> UploadResponse:
    """Upload pictures; each one is resized and registered."""
    if len(images) > settings.max_upload_files:
        raise InvalidError(f"At most {settings.max_upload_files} files per upload")

    uploads = (
        (
            upload.filename or "",
            upload.content_type,
            upload.file.read(settings.max_file_size_bytes + 1),
        )
        for upload in images
    )
    result = ingest_service.ingest_batch(db, gallery.images_dir, uploads)
    logger.info(
        f"Upload to '{gallery.key}': {len(result.added)} added, "
        f"{len(result.errors)} failed"
    )
    return UploadResponse(added=result.added, errors=result.errors)


@router.get("/{picture_id}", response_model=PictureResponse)
def get_picture(
    picture_id: int,
    request: Request,
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> PictureResponse:
    """Get one picture with its tags."""
    picture = _get_picture_or_404(db, picture_id)
    return build_picture_response(request, gallery, picture)


@router.get("/{picture_id}/file")
def get_picture_file(
    picture_id: int,
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> FileResponse:
    """Serve the picture bytes."""
    picture = _get_picture_or_404(db, picture_id)
    path = storage_service.path_for(gallery.images_dir, picture.filename)
    if not path.is_file():
        raise NotFoundError(f"File for picture {picture_id} is missing")
    return FileResponse(path)


@router.patch("/{picture_id}", response_model=PictureResponse)
def update_picture(
    picture_id: int,
    data: PictureUpdate,
    request: Request,
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> PictureResponse:
    """Update description, tags, date and location of a picture."""
    picture = _get_picture_or_404(db, picture_id)
    provided = data.model_fields_set

    if "description" in provided:
        picture_service.update_description(db, picture_id, data.description)
    if "tags" in provided and data.tags is not None:
        picture_service.set_tags(db, picture_id, data.tags)
    if "date" in provided or "location" in provided:
        picture_service.update_date_location(
            db,
            picture_id,
            data.date if "date" in provided else picture.date,
            data.location if "location" in provided else picture.location,
        )

    return build_picture_response(request, gallery, _get_picture_or_404(db, picture_id))


@router.delete("/{picture_id}", response_model=OkResponse)
def delete_picture(
    picture_id: int,
    gallery: Gallery = Depends(get_gallery),
    db: Session = Depends(get_db),
) -> OkResponse:
    """Delete a picture and its file."""
    picture = picture_service.delete_picture(db, picture_id)
    if picture is None:
        raise NotFoundError(f"Picture {picture_id} not found")
    storage_service.delete_file(gallery.images_dir, picture.filename)
    return OkResponse()
