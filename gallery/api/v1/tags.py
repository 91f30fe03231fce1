# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin tag endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gallery.api.deps import get_current_admin, get_db
from gallery.schemas.tag import TagCount
from gallery.services import tag_service

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=list[TagCount])
def list_tags(db: Session = Depends(get_db)) -> list[TagCount]:
    """List all tags with their picture counts."""
    return [
        TagCount(name=name, count=count)
        for name, count in tag_service.list_tags_with_counts(db)
    ]
