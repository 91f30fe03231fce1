# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Delivery engine: picks the next picture for a token and advances its state.

Sequential mode keeps a raw, ever-increasing counter and reduces it modulo
the live collection size on every read, so added pictures are picked up
without resetting anyone's position.

Random mode walks a cached permutation of all picture ids. The permutation
is regenerated from the live collection when it is missing, empty or
exhausted, and immediately after the last entry is served, so the stored
state is always either mid-cycle or a fresh cycle. Pictures added or
deleted only enter or leave the rotation at those boundaries. A cached id
whose picture was deleted in the meantime is reported as not found (the
cursor still moves past it).

Each step is a read-modify-write of the token row guarded by a
compare-and-swap on ``state_version``; a lost race is retried on fresh
state a bounded number of times.
"""

import logging
import random
from dataclasses import dataclass, replace

from sqlalchemy.orm import Session

from gallery.exceptions import (
    ConflictError,
    EmptyCollectionError,
    ForbiddenError,
    NotFoundError,
)
from gallery.models import DeliveryMode, Picture
from gallery.services import picture_service, token_service
from gallery.services.token_service import TokenState

logger = logging.getLogger(__name__)

# Attempts at the compare-and-swap before giving up with ConflictError
DELIVERY_CAS_ATTEMPTS = 5

_system_random = random.SystemRandom()


@dataclass
class Delivery:
    """A delivered picture and the token it was delivered to.

    The picture's fields are copied before the token state is committed,
    so a delivery stays readable after the session expires or the picture
    is deleted.
    """

    picture_id: int
    filename: str
    description: str | None
    date: str | None
    location: str | None
    token: str
    state: TokenState

    @classmethod
    def from_picture(cls, picture: Picture, state: TokenState) -> "Delivery":
        return cls(
            picture_id=picture.id,
            filename=picture.filename,
            description=picture.description,
            date=picture.date,
            location=picture.location,
            token=state.token,
            state=replace(state, version=state.version + 1),
        )


def needs_regeneration(ids: list[int] | None, index: int) -> bool:
    """True when a random cycle is missing, empty or exhausted."""
    return not ids or index < 0 or index >= len(ids)


def shuffled_ids(ids: list[int], rng: random.Random) -> list[int]:
    """Uniformly random permutation of ``ids`` (Fisher-Yates via ``shuffle``)."""
    permutation = list(ids)
    rng.shuffle(permutation)
    return permutation


def advance_sequential(
    db: Session, state: TokenState
) -> tuple[Picture | None, TokenState]:
    """Select the picture at ``cursor mod n`` and compute the next state.

    Raises:
        EmptyCollectionError: If the gallery has no pictures.
    """
    total = picture_service.count_pictures(db)
    if total == 0:
        raise EmptyCollectionError()

    picture = picture_service.get_picture_by_ordinal(db, state.current_index % total)
    return picture, replace(state, current_index=state.current_index + 1)


def advance_random(
    db: Session, state: TokenState, rng: random.Random
) -> tuple[Picture | None, TokenState]:
    """Select the picture at the permutation cursor and compute the next state.

    Raises:
        EmptyCollectionError: If the gallery has no pictures.
    """
    ids = state.random_ids
    index = state.random_index
    if needs_regeneration(ids, index):
        ids = shuffled_ids(picture_service.get_all_picture_ids(db), rng)
        index = 0

    if not ids:
        raise EmptyCollectionError()

    picture = picture_service.get_picture(db, ids[index])

    index += 1
    if index >= len(ids):
        ids = shuffled_ids(picture_service.get_all_picture_ids(db), rng)
        index = 0

    return picture, replace(state, random_ids=ids, random_index=index)


def deliver_next(
    db: Session,
    token: str,
    mode: DeliveryMode = DeliveryMode.SEQUENTIAL,
    rng: random.Random | None = None,
) -> Delivery:
    """Deliver the next picture for ``token`` and persist the advanced state.

    Args:
        db: Database session
        token: Access token string
        mode: Sequential or random traversal
        rng: Random source for shuffling (system randomness by default)

    Returns:
        The delivered picture

    Raises:
        ForbiddenError: If the token is unknown or revoked.
        EmptyCollectionError: If the gallery has no pictures.
        NotFoundError: If the selected picture no longer exists.
        ConflictError: If concurrent requests kept winning the state update.
    """
    rng = rng or _system_random
    mode = DeliveryMode(mode)

    for attempt in range(1, DELIVERY_CAS_ATTEMPTS + 1):
        state = token_service.load_state(db, token)
        if state is None:
            raise ForbiddenError()

        if mode == DeliveryMode.RANDOM:
            picture, new_state = advance_random(db, state, rng)
        else:
            picture, new_state = advance_sequential(db, state)
        delivery = Delivery.from_picture(picture, new_state) if picture is not None else None

        if token_service.save_state(db, new_state):
            break
        logger.debug(f"Token state changed concurrently, retrying ({attempt})")
    else:
        raise ConflictError("Token state is being updated concurrently")

    if delivery is None:
        raise NotFoundError()
    return delivery
