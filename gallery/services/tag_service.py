# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tag normalization and tag lookups."""

import re
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from gallery.models import Tag, picture_tags

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_CHARS_RE = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN_RE = re.compile(r"-+")


def normalize_tag(raw: Any) -> str:
    """Map a free-text label to its canonical slug.

    Lowercases, turns whitespace runs into single hyphens, drops anything
    outside ``[a-z0-9-]``, collapses hyphen runs and trims hyphens from
    both ends. An empty result means the label should be discarded.

    Example:
        "  Paris, 2024!! " -> "paris-2024"
    """
    if not isinstance(raw, str) or not raw:
        return ""
    slug = _WHITESPACE_RE.sub("-", raw.lower())
    slug = _INVALID_CHARS_RE.sub("", slug)
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    return slug.strip("-")


def get_tag_by_name(db: Session, name: str) -> Tag | None:
    """Get a tag by its canonical name."""
    return db.query(Tag).filter(Tag.name == name).first()


def get_or_create_tag(db: Session, raw_name: Any) -> Tag | None:
    """Get the tag for ``raw_name``, creating it if needed.

    Does not commit; the caller owns the transaction. Returns None when the
    name normalizes to nothing.
    """
    name = normalize_tag(raw_name)
    if not name:
        return None

    tag = get_tag_by_name(db, name)
    if tag is None:
        tag = Tag(name=name)
        db.add(tag)
        db.flush()
    return tag


def list_tags_with_counts(db: Session) -> list[tuple[str, int]]:
    """All tags, alphabetically, with the number of pictures carrying each.

    Tags without pictures are included with a count of zero.
    """
    rows = (
        db.query(Tag.name, func.count(picture_tags.c.picture_id.distinct()))
        .outerjoin(picture_tags, picture_tags.c.tag_id == Tag.id)
        .group_by(Tag.id, Tag.name)
        .order_by(Tag.name)
        .all()
    )
    return [(name, count) for name, count in rows]
