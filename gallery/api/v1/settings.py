# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin settings endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gallery.api.deps import get_current_admin, get_db
from gallery.config import settings
from gallery.exceptions import InvalidError
from gallery.schemas.settings import GallerySettingsResponse, GallerySettingsUpdate
from gallery.services import settings_service

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=GallerySettingsResponse)
def get_settings(db: Session = Depends(get_db)) -> GallerySettingsResponse:
    """Get the gallery settings."""
    return GallerySettingsResponse(
        max_resolution=settings_service.get_max_resolution(db)
    )


@router.put("", response_model=GallerySettingsResponse)
def update_settings(
    data: GallerySettingsUpdate,
    db: Session = Depends(get_db),
) -> GallerySettingsResponse:
    """Update the gallery settings."""
    low, high = settings.max_resolution_min, settings.max_resolution_max
    if not low <= data.max_resolution <= high:
        raise InvalidError(f"max_resolution must be {low}-{high}")

    return GallerySettingsResponse(
        max_resolution=settings_service.set_max_resolution(db, data.max_resolution)
    )
