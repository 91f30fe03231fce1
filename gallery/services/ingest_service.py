# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Picture ingest: re-encoding, EXIF metadata and registration of uploads."""

import io
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from PIL import ExifTags, Image, ImageOps, UnidentifiedImageError
from sqlalchemy.orm import Session

from gallery.config import settings
from gallery.exceptions import GalleryError, InvalidError
from gallery.models import Picture
from gallery.services import picture_service, settings_service, storage_service

logger = logging.getLogger(__name__)

# Checked in order, first hit wins
EXIF_DATE_TAGS = (
    ExifTags.Base.DateTimeOriginal,
    ExifTags.Base.DateTimeDigitized,
    ExifTags.Base.DateTime,
)
_EXIF_DATE_RE = re.compile(r"^(\d{4}):(\d{2}):(\d{2})")


@dataclass
class ImageMetadata:
    """Metadata read from a picture's EXIF block."""

    date: str | None = None
    location: str | None = None


@dataclass
class EncodedImage:
    """A picture re-encoded for storage."""

    data: bytes
    extension: str
    width: int
    height: int
    metadata: ImageMetadata


@dataclass
class IngestResult:
    """Outcome of a batch upload."""

    added: list[dict] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)


def fit_within(width: int, height: int, max_resolution: int) -> tuple[int, int]:
    """Scale ``width`` x ``height`` down so the longest edge fits ``max_resolution``.

    Aspect ratio is kept; pictures are never scaled up.
    """
    if width <= max_resolution and height <= max_resolution:
        return width, height
    if width >= height:
        return max_resolution, max(1, round(height / width * max_resolution))
    return max(1, round(width / height * max_resolution)), max_resolution


def _parse_exif_date(value: object) -> str | None:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    if not isinstance(value, str):
        return None
    match = _EXIF_DATE_RE.match(value.strip())
    if not match:
        return None
    return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"


def _gps_to_degrees(value: tuple, ref: object) -> float:
    degrees, minutes, seconds = (float(part) for part in value)
    result = degrees + minutes / 60 + seconds / 3600
    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="ignore")
    if isinstance(ref, str) and ref.strip().upper() in ("S", "W"):
        result = -result
    return result


def extract_metadata(image: Image.Image) -> ImageMetadata:
    """Read capture date and GPS position from EXIF.

    Unreadable EXIF data is logged and treated as absent.
    """
    metadata = ImageMetadata()
    try:
        exif = image.getexif()
        if not exif:
            return metadata

        exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
        for tag in EXIF_DATE_TAGS:
            metadata.date = _parse_exif_date(exif_ifd.get(tag) or exif.get(tag))
            if metadata.date:
                break

        gps = exif.get_ifd(ExifTags.IFD.GPSInfo)
        latitude = gps.get(ExifTags.GPS.GPSLatitude)
        longitude = gps.get(ExifTags.GPS.GPSLongitude)
        if latitude and longitude:
            lat = _gps_to_degrees(latitude, gps.get(ExifTags.GPS.GPSLatitudeRef))
            lon = _gps_to_degrees(longitude, gps.get(ExifTags.GPS.GPSLongitudeRef))
            decimals = settings.gps_coord_decimals
            metadata.location = f"{lat:.{decimals}f},{lon:.{decimals}f}"
    except (KeyError, TypeError, ValueError, ZeroDivisionError, OSError) as e:
        logger.warning(f"Failed to extract EXIF: {e}")
    return metadata


def encode_image(data: bytes, extension: str, max_resolution: int) -> EncodedImage:
    """Apply EXIF orientation, scale to fit and re-encode.

    PNG and WebP keep their format; everything else becomes JPEG.

    Raises:
        InvalidError: If the bytes are not a readable image or exceed
            Pillow's decompression bomb limit.
    """
    try:
        with Image.open(io.BytesIO(data)) as source:
            metadata = extract_metadata(source)
            image = ImageOps.exif_transpose(source)
            size = fit_within(image.width, image.height, max_resolution)
            if size != (image.width, image.height):
                image = image.resize(size, Image.Resampling.LANCZOS)

            output = io.BytesIO()
            if extension == ".png":
                image.save(output, "PNG")
            elif extension == ".webp":
                image.save(output, "WEBP", quality=settings.webp_quality)
            else:
                if image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")
                image.save(output, "JPEG", quality=settings.jpeg_quality)
                if extension not in (".jpg", ".jpeg"):
                    extension = ".jpg"
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise InvalidError(f"Could not read image: {e}") from e
    except Image.DecompressionBombError as e:
        raise InvalidError(f"Image too large: {e}") from e

    return EncodedImage(
        data=output.getvalue(),
        extension=extension,
        width=size[0],
        height=size[1],
        metadata=metadata,
    )


def ingest_upload(
    db: Session,
    images_dir: Path,
    data: bytes,
    original_name: str,
    content_type: str | None,
) -> Picture:
    """Store one uploaded picture and register it.

    Pictures with an EXIF capture date are tagged with its year. The stored
    file is removed again when the picture cannot be registered.

    Raises:
        InvalidError: On a disallowed type, oversize payload or unreadable image.
        ConflictError: If the generated filename is already registered.
    """
    if content_type not in settings.allowed_mime_types:
        raise InvalidError("Invalid file type")
    if len(data) > settings.max_file_size_bytes:
        raise InvalidError("File too large")

    extension = Path(original_name or "").suffix.lower() or settings.default_image_ext
    encoded = encode_image(data, extension, settings_service.get_max_resolution(db))

    filename = storage_service.generate_filename(encoded.extension)
    storage_service.save_bytes(images_dir, filename, encoded.data)
    try:
        picture = picture_service.create_picture(
            db,
            filename,
            date=encoded.metadata.date,
            location=encoded.metadata.location,
        )
    except Exception:
        storage_service.delete_file(images_dir, filename)
        raise

    if encoded.metadata.date:
        year = encoded.metadata.date[:4]
        if year.isdigit():
            picture_service.set_tags(db, picture.id, [year])

    return picture


def ingest_batch(
    db: Session,
    images_dir: Path,
    uploads: Iterable[tuple[str, str | None, bytes]],
) -> IngestResult:
    """Ingest several uploads; a failing file does not stop the batch.

    Args:
        db: Database session
        images_dir: Directory to store pictures in
        uploads: ``(original_name, content_type, data)`` per file

    Returns:
        Added pictures and per-file errors
    """
    result = IngestResult()
    for original_name, content_type, data in uploads:
        try:
            picture = ingest_upload(db, images_dir, data, original_name, content_type)
        except (GalleryError, OSError) as e:
            logger.warning(f"Upload of {original_name} failed: {e}")
            result.errors.append({"file": original_name, "error": str(e)})
            continue
        result.added.append({"id": picture.id, "filename": picture.filename})
    return result
