# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Common schema types."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


class OkResponse(BaseModel):
    """Acknowledgement response."""

    ok: bool = True


class ErrorResponse(BaseModel):
    """Error body produced for gallery errors."""

    detail: str
    code: str
