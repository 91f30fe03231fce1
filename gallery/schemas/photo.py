# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Schemas for token-based picture delivery."""

from pydantic import BaseModel


class PhotoResponse(BaseModel):
    """A delivered picture."""

    id: int
    url: str
    description: str | None = None
    date: str | None = None
    location: str | None = None
