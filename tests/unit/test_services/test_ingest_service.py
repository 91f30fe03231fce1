# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for ingest_service."""

import io

import pytest
from PIL import ExifTags, Image
from sqlalchemy.exc import OperationalError

from gallery.config import settings
from gallery.exceptions import InvalidError
from gallery.models import Picture
from gallery.services import (
    ingest_service,
    picture_service,
    settings_service,
    storage_service,
)


def make_image(
    fmt: str = "PNG",
    size: tuple[int, int] = (40, 20),
    mode: str = "RGB",
    exif: Image.Exif | None = None,
) -> bytes:
    """Encode a solid-color picture in memory."""
    image = Image.new(mode, size, "red" if mode != "P" else 1)
    buffer = io.BytesIO()
    if exif is not None:
        image.save(buffer, fmt, exif=exif.tobytes())
    else:
        image.save(buffer, fmt)
    return buffer.getvalue()


def dated_exif(value: str = "2021:06:15 10:00:00") -> Image.Exif:
    exif = Image.Exif()
    exif[ExifTags.Base.DateTime] = value
    return exif


class TestFitWithin:
    """Tests for scaling to the max resolution."""

    @pytest.mark.parametrize(
        ("size", "max_resolution", "expected"),
        [
            ((800, 600), 1920, (800, 600)),
            ((1920, 1080), 1920, (1920, 1080)),
            ((4000, 2000), 1000, (1000, 500)),
            ((2000, 4000), 1000, (500, 1000)),
            ((3000, 3000), 100, (100, 100)),
            ((10000, 10), 100, (100, 1)),
        ],
    )
    def test_fit_within(self, size, max_resolution, expected):
        assert ingest_service.fit_within(*size, max_resolution) == expected


class TestExif:
    """Tests for EXIF metadata parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2021:06:15 10:00:00", "2021-06-15"),
            (b"1999:12:31 23:59:59", "1999-12-31"),
            ("  2020:01:02", "2020-01-02"),
            ("garbage", None),
            ("", None),
            (None, None),
            (12345, None),
        ],
    )
    def test_parse_exif_date(self, value, expected):
        assert ingest_service._parse_exif_date(value) == expected

    @pytest.mark.parametrize(
        ("value", "ref", "expected"),
        [
            ((52, 30, 0), "N", 52.5),
            ((52, 30, 0), "S", -52.5),
            ((13, 0, 36), b"E", 13.01),
            ((13, 0, 36), "W", -13.01),
            ((0, 0, 0), None, 0.0),
        ],
    )
    def test_gps_to_degrees(self, value, ref, expected):
        assert ingest_service._gps_to_degrees(value, ref) == pytest.approx(expected)

    def test_extract_date_from_exif(self):
        data = make_image("JPEG", exif=dated_exif())
        with Image.open(io.BytesIO(data)) as image:
            metadata = ingest_service.extract_metadata(image)

        assert metadata.date == "2021-06-15"
        assert metadata.location is None

    def test_extract_without_exif(self):
        with Image.open(io.BytesIO(make_image())) as image:
            metadata = ingest_service.extract_metadata(image)

        assert metadata.date is None
        assert metadata.location is None


class TestEncodeImage:
    """Tests for re-encoding."""

    def test_png_stays_png(self):
        encoded = ingest_service.encode_image(make_image("PNG"), ".png", 1920)

        assert encoded.extension == ".png"
        with Image.open(io.BytesIO(encoded.data)) as image:
            assert image.format == "PNG"
            assert image.size == (40, 20)

    def test_jpeg_extension_kept(self):
        encoded = ingest_service.encode_image(make_image("JPEG"), ".jpeg", 1920)
        assert encoded.extension == ".jpeg"

    def test_other_formats_become_jpeg(self):
        encoded = ingest_service.encode_image(make_image("GIF", mode="P"), ".gif", 1920)

        assert encoded.extension == ".jpg"
        with Image.open(io.BytesIO(encoded.data)) as image:
            assert image.format == "JPEG"

    def test_downscales_to_max_resolution(self):
        encoded = ingest_service.encode_image(make_image(size=(400, 200)), ".png", 100)

        assert (encoded.width, encoded.height) == (100, 50)
        with Image.open(io.BytesIO(encoded.data)) as image:
            assert image.size == (100, 50)

    def test_applies_exif_orientation(self):
        exif = Image.Exif()
        exif[ExifTags.Base.Orientation] = 6
        data = make_image("JPEG", size=(40, 20), exif=exif)

        encoded = ingest_service.encode_image(data, ".jpg", 1920)

        assert (encoded.width, encoded.height) == (20, 40)

    def test_unreadable_image(self):
        with pytest.raises(InvalidError):
            ingest_service.encode_image(b"not an image", ".png", 1920)

    def test_decompression_bomb_is_invalid(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(InvalidError, match="Image too large"):
            ingest_service.encode_image(make_image(size=(40, 20)), ".png", 1920)


class TestIngestUpload:
    """Tests for registering uploads."""

    def test_ingest_png(self, db_session, tmp_path):
        picture = ingest_service.ingest_upload(
            db_session, tmp_path, make_image(), "holiday.PNG", "image/png"
        )

        assert picture.id is not None
        assert picture.filename.endswith(".png")
        assert picture.filename != "holiday.PNG"
        assert picture.date is None
        assert picture.tag_names == []
        assert storage_service.path_for(tmp_path, picture.filename).exists()

    def test_exif_date_adds_year_tag(self, db_session, tmp_path):
        data = make_image("JPEG", exif=dated_exif())

        picture = ingest_service.ingest_upload(
            db_session, tmp_path, data, "photo.jpg", "image/jpeg"
        )

        assert picture.date == "2021-06-15"
        assert picture.tag_names == ["2021"]

    def test_missing_extension_uses_default(self, db_session, tmp_path):
        picture = ingest_service.ingest_upload(
            db_session, tmp_path, make_image("JPEG"), "upload", "image/jpeg"
        )
        assert picture.filename.endswith(settings.default_image_ext)

    def test_uses_gallery_max_resolution(self, db_session, tmp_path):
        settings_service.set_max_resolution(db_session, 100)

        picture = ingest_service.ingest_upload(
            db_session, tmp_path, make_image(size=(400, 200)), "big.png", "image/png"
        )

        with Image.open(storage_service.path_for(tmp_path, picture.filename)) as image:
            assert image.size == (100, 50)

    def test_disallowed_type(self, db_session, tmp_path):
        with pytest.raises(InvalidError, match="Invalid file type"):
            ingest_service.ingest_upload(
                db_session, tmp_path, b"hello", "notes.txt", "text/plain"
            )
        assert db_session.query(Picture).count() == 0

    def test_file_too_large(self, db_session, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "max_file_size_bytes", 10)

        with pytest.raises(InvalidError, match="File too large"):
            ingest_service.ingest_upload(
                db_session, tmp_path, make_image(), "a.png", "image/png"
            )

    def test_unreadable_image_leaves_no_file(self, db_session, tmp_path):
        with pytest.raises(InvalidError):
            ingest_service.ingest_upload(
                db_session, tmp_path, b"garbage", "a.png", "image/png"
            )

        assert list(tmp_path.iterdir()) == []
        assert db_session.query(Picture).count() == 0

    def test_failed_insert_removes_stored_file(self, db_session, tmp_path, monkeypatch):
        def failing_create(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(picture_service, "create_picture", failing_create)

        with pytest.raises(OperationalError):
            ingest_service.ingest_upload(
                db_session, tmp_path, make_image(), "a.png", "image/png"
            )

        assert list(tmp_path.iterdir()) == []


def test_ingest_batch_continues_after_failure(db_session, tmp_path):
    result = ingest_service.ingest_batch(
        db_session,
        tmp_path,
        [
            ("a.png", "image/png", make_image()),
            ("bad.txt", "text/plain", b"text"),
            ("b.jpg", "image/jpeg", make_image("JPEG")),
        ],
    )

    assert [entry["id"] for entry in result.added] == [1, 2]
    assert result.errors == [{"file": "bad.txt", "error": "Invalid file type"}]
    assert db_session.query(Picture).count() == 2


def test_ingest_batch_survives_decompression_bomb(db_session, tmp_path, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    result = ingest_service.ingest_batch(
        db_session,
        tmp_path,
        [
            ("huge.png", "image/png", make_image(size=(40, 20))),
            ("small.png", "image/png", make_image(size=(5, 5))),
        ],
    )

    assert len(result.added) == 1
    assert [error["file"] for error in result.errors] == ["huge.png"]
    assert db_session.query(Picture).count() == 1
