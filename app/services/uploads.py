"""
Upload pipeline: validate the filename, put the bytes in object storage,
then record the song in the database.

The two writes are not atomic. If the database write fails after the object
was stored, the object is left in the bucket without a record.
"""

import logging
import secrets
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import DisallowedExtensionError, MissingFileError
from app.models.song import Song

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"mp3", "wav", "ogg"}


def allowed_file(filename: str) -> bool:
    """
    Check the filename extension against ALLOWED_EXTENSIONS

    Only the name is inspected, not the file contents.

    Examples:
        >>> allowed_file("Track.MP3")
        True
        >>> allowed_file("track")
        False
    """
    if "." not in filename:
        return False
    return filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def generate_storage_key(original_filename: str) -> str:
    return f"{secrets.token_hex(16)}_{original_filename}"


def handle_upload(
    db: Session,
    store,
    data: Optional[bytes],
    original_filename: Optional[str],
    content_type: Optional[str] = None,
    name: Optional[str] = None,
) -> Song:
    """
    Store an uploaded audio file and persist its Song record

    Args:
        db: Database session the record is written with
        store: Object store exposing store(data, key, content_type) -> url
        data: File contents, None when no file was sent
        original_filename: Filename as submitted by the client
        content_type: Declared MIME type of the upload
        name: Display name; the storage key is used when empty

    Returns:
        The committed Song

    Raises:
        MissingFileError: no file was provided
        DisallowedExtensionError: extension not in ALLOWED_EXTENSIONS
        Any storage or database error, unchanged
    """
    if data is None or not original_filename:
        raise MissingFileError()

    if not allowed_file(original_filename):
        raise DisallowedExtensionError(original_filename)

    key = generate_storage_key(original_filename)
    url = store.store(data, key, content_type)

    song = Song(
        name=name or key,
        url=url,
        original_filename=original_filename,
    )

    try:
        db.add(song)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Object %s stored but its record was not saved", key)
        raise

    db.refresh(song)
    logger.info("Saved song %s (%s)", song.id, original_filename)
    return song
