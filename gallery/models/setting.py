# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Gallery settings key/value model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gallery.models.base import Base


class Setting(Base):
    """A single gallery setting, stored as a string."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
