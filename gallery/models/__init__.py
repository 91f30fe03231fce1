# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from gallery.models.access_token import AccessToken
from gallery.models.admin_session import AdminSession
from gallery.models.base import Base, TimestampMixin
from gallery.models.enums import DeliveryMode
from gallery.models.picture import Picture
from gallery.models.setting import Setting
from gallery.models.tag import Tag, picture_tags

__all__ = [
    "AccessToken",
    "AdminSession",
    "Base",
    "DeliveryMode",
    "Picture",
    "Setting",
    "Tag",
    "TimestampMixin",
    "picture_tags",
]
