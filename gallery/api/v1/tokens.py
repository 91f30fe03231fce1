# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin access token endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gallery.api.deps import get_current_admin, get_db
from gallery.schemas.common import OkResponse
from gallery.schemas.token import TokenCreatedResponse, TokenResponse
from gallery.services import token_service

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=list[TokenResponse])
def list_tokens(db: Session = Depends(get_db)) -> list[TokenResponse]:
    """List all access tokens."""
    return [TokenResponse.model_validate(t) for t in token_service.list_tokens(db)]


@router.post(
    "", response_model=TokenCreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_token(db: Session = Depends(get_db)) -> TokenCreatedResponse:
    """Create a new access token."""
    access_token = token_service.create_token(db)
    return TokenCreatedResponse(token=access_token.token)


@router.delete("/{token}", response_model=OkResponse)
def delete_token(token: str, db: Session = Depends(get_db)) -> OkResponse:
    """Revoke an access token."""
    token_service.delete_token(db, token)
    return OkResponse()
