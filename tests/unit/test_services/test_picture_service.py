# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for picture_service."""

import pytest
from sqlalchemy import select

from gallery.exceptions import ConflictError, NotFoundError
from gallery.models import Picture, Tag, picture_tags
from gallery.services import picture_service


def create_pictures(db_session, count: int) -> list[Picture]:
    """Helper to create ``count`` pictures named p0.jpg, p1.jpg, ..."""
    return [
        picture_service.create_picture(db_session, f"p{i}.jpg") for i in range(count)
    ]


def test_create_and_get_picture(db_session):
    picture = picture_service.create_picture(
        db_session, "a.jpg", date="2024-05-01", location="48.856600,2.352200"
    )

    fetched = picture_service.get_picture(db_session, picture.id)
    assert fetched == picture
    assert fetched.filename == "a.jpg"
    assert fetched.date == "2024-05-01"
    assert fetched.location == "48.856600,2.352200"
    assert fetched.description is None
    assert fetched.created_at is not None


def test_create_picture_empty_strings_become_null(db_session):
    picture = picture_service.create_picture(db_session, "a.jpg", date="", location="")
    assert picture.date is None
    assert picture.location is None


def test_create_picture_duplicate_filename_conflicts(db_session):
    picture_service.create_picture(db_session, "a.jpg")

    with pytest.raises(ConflictError):
        picture_service.create_picture(db_session, "a.jpg")

    assert picture_service.count_pictures(db_session) == 1


def test_get_missing_picture(db_session):
    assert picture_service.get_picture(db_session, 999) is None


def test_list_pictures_ascending_id(db_session):
    pictures = create_pictures(db_session, 3)

    listed = picture_service.list_pictures(db_session)
    assert [p.id for p in listed] == sorted(p.id for p in pictures)


def test_list_pictures_pagination(db_session):
    pictures = create_pictures(db_session, 5)
    ids = [p.id for p in pictures]

    page = picture_service.list_pictures(db_session, limit=2, offset=2)
    assert [p.id for p in page] == ids[2:4]

    last = picture_service.list_pictures(db_session, limit=2, offset=4)
    assert [p.id for p in last] == ids[4:]

    assert picture_service.list_pictures(db_session, limit=2, offset=10) == []


def test_list_and_count_with_tag_filter(db_session):
    pictures = create_pictures(db_session, 4)
    picture_service.set_tags(db_session, pictures[1].id, ["paris"])
    picture_service.set_tags(db_session, pictures[3].id, ["paris", "night"])

    tagged = picture_service.list_pictures(db_session, tag="paris")
    assert [p.id for p in tagged] == [pictures[1].id, pictures[3].id]
    assert picture_service.count_pictures(db_session, "paris") == 2
    assert picture_service.count_pictures(db_session, "night") == 1
    assert picture_service.count_pictures(db_session, "missing") == 0
    assert picture_service.count_pictures(db_session) == 4

    # Offset applies after filtering
    page = picture_service.list_pictures(db_session, tag="paris", limit=1, offset=1)
    assert [p.id for p in page] == [pictures[3].id]


def test_get_picture_by_ordinal(db_session):
    pictures = create_pictures(db_session, 3)

    for index, picture in enumerate(pictures):
        assert picture_service.get_picture_by_ordinal(db_session, index) == picture

    assert picture_service.get_picture_by_ordinal(db_session, 3) is None
    assert picture_service.get_picture_by_ordinal(db_session, -1) is None


def test_get_picture_by_ordinal_empty_store(db_session):
    assert picture_service.get_picture_by_ordinal(db_session, 0) is None


def test_ordinals_stable_when_pictures_added(db_session):
    pictures = create_pictures(db_session, 2)
    picture_service.create_picture(db_session, "new.jpg")

    assert picture_service.get_picture_by_ordinal(db_session, 0) == pictures[0]
    assert picture_service.get_picture_by_ordinal(db_session, 1) == pictures[1]


def test_get_all_picture_ids(db_session):
    pictures = create_pictures(db_session, 3)
    assert picture_service.get_all_picture_ids(db_session) == [p.id for p in pictures]


def test_ids_are_not_reused_after_delete(db_session):
    pictures = create_pictures(db_session, 2)
    picture_service.delete_picture(db_session, pictures[1].id)

    new = picture_service.create_picture(db_session, "new.jpg")
    assert new.id > pictures[1].id


def test_delete_picture(db_session):
    pictures = create_pictures(db_session, 2)
    picture_service.set_tags(db_session, pictures[0].id, ["paris"])

    removed = picture_service.delete_picture(db_session, pictures[0].id)

    assert removed.filename == "p0.jpg"
    assert picture_service.get_picture(db_session, pictures[0].id) is None
    assert picture_service.get_all_picture_ids(db_session) == [pictures[1].id]
    associations = db_session.execute(select(picture_tags)).all()
    assert associations == []
    # The tag itself survives
    assert db_session.query(Tag).filter(Tag.name == "paris").count() == 1


def test_delete_missing_picture(db_session):
    assert picture_service.delete_picture(db_session, 42) is None


def test_update_description(db_session):
    picture = picture_service.create_picture(db_session, "a.jpg")

    assert picture_service.update_description(db_session, picture.id, "Sunset") is True
    assert picture_service.get_picture(db_session, picture.id).description == "Sunset"

    assert picture_service.update_description(db_session, picture.id, None) is True
    assert picture_service.get_picture(db_session, picture.id).description is None


def test_update_description_missing_picture(db_session):
    assert picture_service.update_description(db_session, 7, "x") is False


def test_update_date_location(db_session):
    picture = picture_service.create_picture(
        db_session, "a.jpg", date="2020-01-01", location="1.0,2.0"
    )

    assert picture_service.update_date_location(
        db_session, picture.id, "2021-02-03", None
    )
    fetched = picture_service.get_picture(db_session, picture.id)
    assert fetched.date == "2021-02-03"
    assert fetched.location is None


def test_update_date_location_missing_picture(db_session):
    assert picture_service.update_date_location(db_session, 7, None, None) is False


def test_set_tags_deduplicates_normalized_names(db_session):
    picture = picture_service.create_picture(db_session, "a.jpg")

    names = picture_service.set_tags(db_session, picture.id, ["Paris", "paris", "  PARIS "])

    assert names == ["paris"]
    assert picture_service.get_picture_tags(db_session, picture.id) == ["paris"]
    assert db_session.query(Tag).count() == 1


def test_set_tags_replaces_full_set(db_session):
    picture = picture_service.create_picture(db_session, "a.jpg")
    picture_service.set_tags(db_session, picture.id, ["old", "keep"])

    picture_service.set_tags(db_session, picture.id, ["Keep", "New One", "!!"])

    assert picture_service.get_picture_tags(db_session, picture.id) == [
        "keep",
        "new-one",
    ]


def test_set_tags_empty_list_clears(db_session):
    picture = picture_service.create_picture(db_session, "a.jpg")
    picture_service.set_tags(db_session, picture.id, ["paris"])

    picture_service.set_tags(db_session, picture.id, [])

    assert picture_service.get_picture_tags(db_session, picture.id) == []


def test_set_tags_missing_picture(db_session):
    with pytest.raises(NotFoundError):
        picture_service.set_tags(db_session, 99, ["paris"])
    assert db_session.query(Tag).count() == 0


def test_get_picture_tags_alphabetical(db_session):
    picture = picture_service.create_picture(db_session, "a.jpg")
    picture_service.set_tags(db_session, picture.id, ["zoo", "alpha", "mid"])

    assert picture_service.get_picture_tags(db_session, picture.id) == [
        "alpha",
        "mid",
        "zoo",
    ]
    assert picture_service.get_picture(db_session, picture.id).tag_names == [
        "alpha",
        "mid",
        "zoo",
    ]
