# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tag model and the picture/tag association table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gallery.models.base import Base

if TYPE_CHECKING:
    from gallery.models.picture import Picture


picture_tags = Table(
    "picture_tags",
    Base.metadata,
    Column(
        "picture_id",
        Integer,
        ForeignKey("pictures.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("idx_picture_tags_tag", "tag_id"),
)


class Tag(Base):
    """A canonical (normalized) tag name."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    # Relationships
    pictures: Mapped[list[Picture]] = relationship(
        "Picture",
        secondary=picture_tags,
        back_populates="tags",
    )
