from typing import Optional

from fastapi import File, Request, UploadFile

from app.core.exceptions import InvalidFileTypeError
from app.services.storage import ObjectStore
from app.services.uploads import allowed_file


def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store


def audio_file_filter(
    file: Optional[UploadFile] = File(None),
) -> Optional[UploadFile]:
    """
    Reject files with a non-audio name before the body is read.

    A missing file is passed through; the upload handler reports it.
    """
    if file is not None and file.filename and not allowed_file(file.filename):
        raise InvalidFileTypeError()
    return file
