# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Picture schemas."""

import datetime
import re

from pydantic import BaseModel, Field, field_validator

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class PictureResponse(BaseModel):
    """Picture metadata as shown to the admin."""

    id: int
    filename: str
    description: str | None = None
    date: str | None = None
    location: str | None = None
    tags: list[str] = Field(default_factory=list)
    url: str
    created_at: datetime.datetime


class PictureListResponse(BaseModel):
    """One page of pictures."""

    pictures: list[PictureResponse]
    total: int
    page: int
    limit: int
    pages: int


class PictureUpdate(BaseModel):
    """Partial update of a picture.

    Only fields present in the request are changed; ``null`` or an empty
    string clears a field.
    """

    description: str | None = None
    tags: list[str] | None = None
    date: str | None = None
    location: str | None = Field(None, max_length=64)

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not DATE_PATTERN.match(value):
            raise ValueError("date must be YYYY-MM-DD")
        return value


class UploadedPicture(BaseModel):
    """A picture created by an upload."""

    id: int
    filename: str


class UploadError(BaseModel):
    """A file an upload could not ingest."""

    file: str
    error: str


class UploadResponse(BaseModel):
    """Result of a batch upload."""

    added: list[UploadedPicture]
    errors: list[UploadError]
