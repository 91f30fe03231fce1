# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Admin authentication service."""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from gallery.config import settings
from gallery.models import AdminSession
from gallery.models.base import utcnow
from gallery.security import generate_token, get_password_hash, verify_password
from gallery.services import settings_service

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 32


def ensure_password_hash(db: Session) -> str:
    """Get the admin password hash, seeding it from the configured password."""
    password_hash = settings_service.get_admin_password_hash(db)
    if password_hash is None:
        password_hash = get_password_hash(settings.password)
        settings_service.set_admin_password_hash(db, password_hash)
        logger.info("Stored admin password hash from configuration")
    return password_hash


def authenticate(db: Session, password: str) -> bool:
    """Check the admin password."""
    return verify_password(password, ensure_password_hash(db))


def create_session(db: Session) -> str:
    """Create a new admin session and return its token."""
    token = generate_token(SESSION_TOKEN_BYTES)
    session = AdminSession(
        token=token,
        expires_at=utcnow() + timedelta(seconds=settings.session_max_age_seconds),
    )
    db.add(session)
    db.commit()
    return token


def get_session(db: Session, token: str) -> AdminSession | None:
    """Get a valid session by token."""
    session = db.query(AdminSession).filter(AdminSession.token == token).first()
    if not session:
        return None
    if session.expires_at < utcnow():
        db.delete(session)
        db.commit()
        return None
    return session


def delete_session(db: Session, token: str) -> bool:
    """Delete a session by token."""
    session = db.query(AdminSession).filter(AdminSession.token == token).first()
    if session:
        db.delete(session)
        db.commit()
        return True
    return False


def cleanup_expired_sessions(db: Session) -> int:
    """Delete all expired sessions. Returns count of deleted sessions."""
    count = db.query(AdminSession).filter(AdminSession.expires_at < utcnow()).delete()
    db.commit()
    return count
