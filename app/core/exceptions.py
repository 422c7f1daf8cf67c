"""
Domain errors for the song upload service

Upload errors are client input errors and map to HTTP 400. Storage and
persistence failures are not wrapped: they propagate as raised by boto3 and
SQLAlchemy.
"""


class SongServiceError(Exception):
    pass


class ConfigError(SongServiceError):
    """Required configuration is missing or malformed. Fatal at startup."""


class UploadError(SongServiceError):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFileError(UploadError):
    def __init__(self, message: str = "No file part"):
        super().__init__(message)


class InvalidFileTypeError(UploadError):
    """Raised by the request filter before the file body is read."""

    def __init__(self, message: str = "Invalid file type"):
        super().__init__(message)


class DisallowedExtensionError(UploadError):
    def __init__(self, filename: str):
        super().__init__(f"File type not allowed: {filename}")
        self.filename = filename
