# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Access token schemas."""

import datetime

from pydantic import BaseModel


class TokenCreatedResponse(BaseModel):
    """A newly created token."""

    token: str


class TokenResponse(BaseModel):
    """Token with its traversal position."""

    token: str
    current_index: int
    random_index: int
    created_at: datetime.datetime

    model_config = {"from_attributes": True}
