# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Token registry: access tokens and their traversal state."""

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from gallery.config import settings
from gallery.exceptions import NotFoundError
from gallery.models import AccessToken
from gallery.security import generate_token

logger = logging.getLogger(__name__)


@dataclass
class TokenState:
    """Snapshot of a token's traversal state.

    ``version`` is the ``state_version`` the snapshot was read at; a save
    only succeeds while the stored row is still at that version.
    """

    token: str
    current_index: int = 0
    random_ids: list[int] | None = None
    random_index: int = 0
    version: int = 0


def create_token(db: Session) -> AccessToken:
    """Create a new access token with fresh traversal state."""
    access_token = AccessToken(
        token=generate_token(settings.token_bytes),
        current_index=0,
        random_index=0,
        state_version=0,
    )
    db.add(access_token)
    db.commit()
    db.refresh(access_token)
    logger.info("Created access token")
    return access_token


def get_token(db: Session, token: str) -> AccessToken | None:
    """Get a token row by its string."""
    return db.query(AccessToken).filter(AccessToken.token == token).first()


def token_exists(db: Session, token: str) -> bool:
    """Check whether ``token`` is a valid (not revoked) token."""
    return (
        db.query(AccessToken.token).filter(AccessToken.token == token).first()
        is not None
    )


def list_tokens(db: Session) -> list[AccessToken]:
    """All tokens, oldest first."""
    return db.query(AccessToken).order_by(AccessToken.created_at).all()


def delete_token(db: Session, token: str) -> None:
    """Revoke a token.

    Raises:
        NotFoundError: If the token does not exist.
    """
    count = db.query(AccessToken).filter(AccessToken.token == token).delete()
    db.commit()
    if count == 0:
        raise NotFoundError("Token not found")
    logger.info("Deleted access token")


def load_state(db: Session, token: str) -> TokenState | None:
    """Read the current traversal state of a token, or None if it is unknown."""
    access_token = db.execute(
        select(AccessToken)
        .where(AccessToken.token == token)
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if access_token is None:
        return None

    random_ids = access_token.random_ids
    if not isinstance(random_ids, list):
        random_ids = None

    return TokenState(
        token=access_token.token,
        current_index=access_token.current_index or 0,
        random_ids=random_ids,
        random_index=access_token.random_index or 0,
        version=access_token.state_version or 0,
    )


def save_state(db: Session, state: TokenState) -> bool:
    """Write a new traversal state using compare-and-swap on ``state_version``.

    Returns:
        False if the token changed (or vanished) since ``state`` was loaded
    """
    result = db.execute(
        update(AccessToken)
        .where(
            AccessToken.token == state.token,
            AccessToken.state_version == state.version,
        )
        .values(
            current_index=state.current_index,
            random_ids=state.random_ids,
            random_index=state.random_index,
            state_version=AccessToken.state_version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1
