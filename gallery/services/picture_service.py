# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Picture store: the ordered picture collection and its tags.

The canonical order is ascending id. Ordinal lookups and ``get_all_picture_ids``
both follow it.
"""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from gallery.exceptions import ConflictError, NotFoundError
from gallery.models import Picture, Tag
from gallery.services import tag_service

logger = logging.getLogger(__name__)


def _filtered_query(db: Session, tag: str | None) -> Query:
    query = db.query(Picture)
    if tag:
        query = query.join(Picture.tags).filter(Tag.name == tag)
    return query


def list_pictures(
    db: Session,
    tag: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Picture]:
    """List pictures in ascending id order.

    Args:
        db: Database session
        tag: Only include pictures carrying this tag name
        limit: Maximum number of pictures to return (all when None)
        offset: Number of matching pictures to skip

    Returns:
        Matching pictures
    """
    query = _filtered_query(db, tag).order_by(Picture.id)
    if limit is not None:
        query = query.limit(limit).offset(offset)
    elif offset:
        query = query.offset(offset)
    return query.all()


def count_pictures(db: Session, tag: str | None = None) -> int:
    """Count pictures, optionally only those carrying ``tag``."""
    return _filtered_query(db, tag).count()


def get_picture(db: Session, picture_id: int) -> Picture | None:
    """Get a picture by id."""
    return db.query(Picture).filter(Picture.id == picture_id).first()


def get_picture_by_ordinal(db: Session, index: int) -> Picture | None:
    """Get the picture at zero-based position ``index`` in ascending id order."""
    if index < 0:
        return None
    return db.query(Picture).order_by(Picture.id).offset(index).limit(1).first()


def get_all_picture_ids(db: Session) -> list[int]:
    """All picture ids in ascending order."""
    return [row[0] for row in db.query(Picture.id).order_by(Picture.id).all()]


def create_picture(
    db: Session,
    filename: str,
    date: str | None = None,
    location: str | None = None,
) -> Picture:
    """Insert a picture record.

    Raises:
        ConflictError: If a picture with this filename already exists.
    """
    picture = Picture(filename=filename, date=date or None, location=location or None)
    db.add(picture)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Picture file already registered: {filename}") from e
    db.refresh(picture)
    logger.info(f"Added picture {picture.id} ({filename})")
    return picture


def delete_picture(db: Session, picture_id: int) -> Picture | None:
    """Delete a picture and its tag associations.

    Removing the backing file is up to the caller; the metadata delete
    stands even if that fails.

    Returns:
        The removed picture, or None if it did not exist
    """
    picture = get_picture(db, picture_id)
    if picture is None:
        return None
    filename = picture.filename
    db.delete(picture)
    db.commit()
    logger.info(f"Deleted picture {picture_id} ({filename})")
    return picture


def update_description(db: Session, picture_id: int, description: str | None) -> bool:
    """Overwrite a picture's description. Returns False if it does not exist."""
    picture = get_picture(db, picture_id)
    if picture is None:
        return False
    picture.description = description or None
    db.commit()
    return True


def update_date_location(
    db: Session,
    picture_id: int,
    date: str | None,
    location: str | None,
) -> bool:
    """Overwrite date and location together. Returns False if the picture is absent."""
    picture = get_picture(db, picture_id)
    if picture is None:
        return False
    picture.date = date or None
    picture.location = location or None
    db.commit()
    return True


def set_tags(db: Session, picture_id: int, names: Iterable[Any]) -> list[str]:
    """Replace the full tag set of a picture.

    Names are normalized; duplicates and names that normalize to nothing
    are dropped. Missing tags are created. Everything happens in one
    transaction.

    Returns:
        The picture's tag names, alphabetically

    Raises:
        NotFoundError: If the picture does not exist.
    """
    picture = get_picture(db, picture_id)
    if picture is None:
        raise NotFoundError(f"Picture {picture_id} not found")

    tags: dict[str, Tag] = {}
    try:
        for name in names:
            tag = tag_service.get_or_create_tag(db, name)
            if tag is not None:
                tags[tag.name] = tag
        picture.tags = list(tags.values())
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(picture)
    return picture.tag_names


def get_picture_tags(db: Session, picture_id: int) -> list[str]:
    """Tag names of a picture, alphabetically."""
    return [
        row[0]
        for row in db.query(Tag.name)
        .join(Tag.pictures)
        .filter(Picture.id == picture_id)
        .order_by(Tag.name)
        .all()
    ]
