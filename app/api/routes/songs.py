import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import audio_file_filter, get_object_store
from app.core.database import get_db
from app.core.exceptions import UploadError
from app.models.song import Song
from app.schemas.song import ErrorResponse, SongOut, UploadResponse
from app.services.storage import ObjectStore
from app.services.uploads import handle_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Songs"])

@router.get(
    "/songs",
    response_model=list[SongOut],
    responses={500: {"model": ErrorResponse}},
)
def list_songs(db: Session = Depends(get_db)):
    """
    Return every song record, in whatever order the database yields them
    """
    try:
        return db.query(Song).all()
    except Exception as e:
        logger.exception("Failed to fetch songs")
        raise HTTPException(status_code=500, detail=f"Failed to fetch songs: {str(e)}")

@router.post(
    "/upload",
    status_code=201,
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def upload_song(
    file: Optional[UploadFile] = Depends(audio_file_filter),
    name: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
):
    data = file.file.read() if file is not None else None

    try:
        song = handle_upload(
            db,
            store,
            data=data,
            original_filename=file.filename if file is not None else None,
            content_type=file.content_type if file is not None else None,
            name=name,
        )
    except UploadError:
        raise
    except Exception as e:
        logger.exception("Upload failed")
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}")

    return UploadResponse(message="Song uploaded successfully!", song_id=song.id)
