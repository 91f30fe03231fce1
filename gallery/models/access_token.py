# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Access token model holding per-token traversal state."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gallery.models.base import Base, utcnow


class AccessToken(Base):
    """Bearer token for picture delivery.

    ``current_index`` is the raw sequential counter; it is reduced modulo
    the live collection size when read. ``random_ids`` caches the current
    shuffled cycle of picture ids, which may contain ids of pictures that
    were deleted since. ``state_version`` is bumped on every state write
    and guards the compare-and-swap in ``token_service.save_state``.
    """

    __tablename__ = "tokens"

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    current_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    random_ids: Mapped[list[int] | None] = mapped_column(
        JSON(none_as_null=True), nullable=True
    )
    random_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    state_version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        nullable=False,
    )
