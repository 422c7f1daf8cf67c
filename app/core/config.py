import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from app.core.exceptions import ConfigError

load_dotenv()

REQUIRED_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_S3_BUCKET_NAME",
    "DATABASE_URL",
)

DEFAULT_REGION = "us-east-1"
DEFAULT_PORT = 5000

CORS_ORIGINS = [
    "https://saregama.onrender.com",
    "http://saregama.onrender.com",
    "http://localhost:3000",
    "https://localhost:3000",
]
CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


@dataclass(frozen=True)
class Settings:
    access_key: str
    secret_key: str
    bucket: str
    database_url: str
    region: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def load_settings(environ=None) -> Settings:
    """
    Build Settings from the environment (after .env has been loaded)

    Raises:
        ConfigError: if a required variable is missing or PORT is not an integer
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARS if not env.get(name)]
    if missing:
        raise ConfigError(
            f"Missing critical environment variable(s): {', '.join(missing)}"
        )

    raw_port = env.get("PORT") or str(DEFAULT_PORT)
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw_port!r}")

    return Settings(
        access_key=env["AWS_ACCESS_KEY_ID"],
        secret_key=env["AWS_SECRET_ACCESS_KEY"],
        bucket=env["AWS_S3_BUCKET_NAME"],
        database_url=env["DATABASE_URL"],
        region=env.get("AWS_REGION") or DEFAULT_REGION,
        endpoint_url=env.get("AWS_S3_ENDPOINT_URL") or None,
        port=port,
        log_level=env.get("LOG_LEVEL", "INFO"),
    )
