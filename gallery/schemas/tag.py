# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tag schemas."""

from pydantic import BaseModel


class TagCount(BaseModel):
    """A tag and how many pictures carry it."""

    name: str
    count: int
