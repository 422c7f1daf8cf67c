"""
Tests for the upload pipeline: filename validation, key generation and
the store-then-persist ordering
"""
import re
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from sqlalchemy.exc import OperationalError

from app.core.exceptions import DisallowedExtensionError, MissingFileError
from app.models.song import Song
from app.services.uploads import allowed_file, generate_storage_key, handle_upload


class TestAllowedFile:
    """Extension checks are case-insensitive and use the last dot"""

    @pytest.mark.parametrize("filename", [
        "Track.MP3",
        "song.mp3",
        "take.2.wav",
        "loop.Ogg",
    ])
    def test_audio_extensions_allowed(self, filename):
        assert allowed_file(filename) is True

    @pytest.mark.parametrize("filename", [
        "track",
        "track.exe",
        "track.mp3.exe",
        "mp3",
        "track.",
        "",
    ])
    def test_other_names_rejected(self, filename):
        assert allowed_file(filename) is False


class TestStorageKey:
    def test_key_format(self):
        key = generate_storage_key("My Track.mp3")
        assert re.fullmatch(r"[0-9a-f]{32}_My Track\.mp3", key)

    def test_same_filename_gives_different_keys(self):
        keys = {generate_storage_key("song.wav") for _ in range(50)}
        assert len(keys) == 50


class TestHandleUpload:
    def test_missing_file_rejected(self, db, object_store):
        with pytest.raises(MissingFileError):
            handle_upload(db, object_store, data=None, original_filename=None)

        assert object_store.objects == {}
        assert db.query(Song).count() == 0

    def test_disallowed_extension_rejected_before_storage(self, db, object_store):
        with pytest.raises(DisallowedExtensionError) as exc_info:
            handle_upload(db, object_store, data=b"MZ", original_filename="setup.exe")

        assert "setup.exe" in exc_info.value.message
        assert object_store.objects == {}
        assert db.query(Song).count() == 0

    def test_name_defaults_to_storage_key(self, db, object_store):
        song = handle_upload(
            db, object_store,
            data=b"RIFF....WAVE",
            original_filename="beat.wav",
            content_type="audio/wav",
        )

        (key,) = object_store.objects
        assert song.id is not None
        assert song.name == key
        assert song.url == f"https://fake-bucket.local/{key}"
        assert song.original_filename == "beat.wav"
        assert object_store.objects[key] == (b"RIFF....WAVE", "audio/wav")

    def test_empty_name_falls_back_to_key(self, db, object_store):
        song = handle_upload(db, object_store, data=b"x", original_filename="a.ogg", name="")
        assert song.name in object_store.objects

    def test_caller_name_kept(self, db, object_store):
        song = handle_upload(db, object_store, data=b"x", original_filename="a.mp3", name="My Song")
        assert song.name == "My Song"

    def test_storage_failure_creates_no_record(self, db, object_store):
        object_store.fail_with = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            "PutObject",
        )

        with pytest.raises(ClientError):
            handle_upload(db, object_store, data=b"x", original_filename="a.mp3")

        assert db.query(Song).count() == 0

    def test_persistence_failure_leaves_stored_object(self, object_store):
        """The stored object is not cleaned up when the record write fails"""
        session = MagicMock()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with pytest.raises(OperationalError):
            handle_upload(session, object_store, data=b"x", original_filename="a.mp3")

        session.rollback.assert_called_once()
        assert len(object_store.objects) == 1
