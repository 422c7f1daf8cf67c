import logging
from typing import Optional
from urllib.parse import quote

import boto3

from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ObjectStore:
    """
    Thin wrapper around an S3 client bound to one bucket

    Objects are written public-read so the returned URL resolves without
    signing. Errors from the provider are not caught here.
    """

    def __init__(
        self,
        client,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
    ):
        self.client = client
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStore":
        session = boto3.session.Session()

        client = session.client(
            "s3",
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key,
            aws_secret_access_key=settings.secret_key,
        )

        return cls(
            client,
            bucket=settings.bucket,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
        )

    def public_url(self, key: str) -> str:
        quoted = quote(key)
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket}/{quoted}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quoted}"

    def store(
        self,
        data: bytes,
        key: str,
        content_type: Optional[str] = None
    ) -> str:
        """
        Upload bytes under key with public-read visibility

        Args:
            data: The file contents
            key: The S3 object key
            content_type: MIME type recorded on the object

        Returns:
            Public URL of the stored object
        """
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type or DEFAULT_CONTENT_TYPE,
            ACL="public-read",
        )

        logger.info("Stored s3://%s/%s (%d bytes)", self.bucket, key, len(data))
        return self.public_url(key)
