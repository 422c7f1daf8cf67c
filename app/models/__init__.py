from app.models.song import Song

__all__ = [
    "Song",
]
