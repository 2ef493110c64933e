import base64
import binascii
import pathlib
from typing import List, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = []

    # Firestore project is the store endpoint; one of the two keys is the credential
    GOOGLE_CLOUD_PROJECT: Optional[str] = None
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None
    FIREBASE_KEY_B64: Optional[str] = None

    SUBMISSIONS_COLLECTION: str = "submissions"
    # relative to the working directory the server is started from
    STATIC_DIR: str = "public"
    STRICT_VALIDATION: bool = False


class StartupCheck(BaseModel):
    ok: bool
    errors: List[str] = []


def check_startup(settings: Settings) -> StartupCheck:
    """Verify the store endpoint and credential are configured.

    Returns a result instead of exiting so the caller decides what a
    failure means.
    """
    errors = []
    if not settings.GOOGLE_CLOUD_PROJECT:
        errors.append("GOOGLE_CLOUD_PROJECT is not set")

    key_b64 = settings.FIREBASE_KEY_B64
    key_path = settings.GOOGLE_APPLICATION_CREDENTIALS
    if key_b64:
        try:
            base64.b64decode(key_b64, validate=True)
        except (binascii.Error, ValueError):
            errors.append("FIREBASE_KEY_B64 is not valid base64")
    elif key_path:
        if not pathlib.Path(key_path).exists():
            errors.append(f"GOOGLE_APPLICATION_CREDENTIALS file not found: {key_path}")
    else:
        errors.append("No database credential: set GOOGLE_APPLICATION_CREDENTIALS or FIREBASE_KEY_B64")

    return StartupCheck(ok=not errors, errors=errors)


def has_credential(settings: Settings) -> bool:
    return bool(settings.FIREBASE_KEY_B64 or settings.GOOGLE_APPLICATION_CREDENTIALS)
