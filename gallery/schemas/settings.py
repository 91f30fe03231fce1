# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Gallery settings schemas."""

from pydantic import BaseModel


class GallerySettingsResponse(BaseModel):
    """Response schema for gallery settings."""

    max_resolution: int


class GallerySettingsUpdate(BaseModel):
    """Schema for updating gallery settings.

    Range checks against the configured bounds happen in the endpoint.
    """

    max_resolution: int
