from pydantic import BaseModel
from uuid import UUID

class SongOut(BaseModel):
    id: UUID
    name: str
    url: str
    original_filename: str

    class Config:
        from_attributes = True

class UploadResponse(BaseModel):
    message: str
    song_id: UUID

class ErrorResponse(BaseModel):
    error: str
