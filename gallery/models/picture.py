# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Picture model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gallery.models.base import Base, TimestampMixin
from gallery.models.tag import picture_tags

if TYPE_CHECKING:
    from gallery.models.tag import Tag


class Picture(Base, TimestampMixin):
    """A stored picture.

    Ids are never reused (``sqlite_autoincrement``), so ascending id order
    is append-only for surviving records.
    """

    __tablename__ = "pictures"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Capture date as YYYY-MM-DD
    date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    # "lat,lon"
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Relationships
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary=picture_tags,
        back_populates="pictures",
        order_by="Tag.name",
    )

    @property
    def tag_names(self) -> list[str]:
        """Tag names in alphabetical order."""
        return [tag.name for tag in self.tags]
