import base64
import json
import logging
import pathlib

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.oauth2 import service_account

from quiz_backend.core.config import Settings
from quiz_backend.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def get_db(settings: Settings) -> firestore.Client:
    """Create the Firestore client. Called once per process by create_app."""
    # 1) Prefer base64 secret if present
    if settings.FIREBASE_KEY_B64:
        creds = service_account.Credentials.from_service_account_info(
            json.loads(base64.b64decode(settings.FIREBASE_KEY_B64))
        )
        project = settings.GOOGLE_CLOUD_PROJECT or creds.project_id
        return firestore.Client(project=project, credentials=creds)

    # 2) Otherwise a key file path
    path = settings.GOOGLE_APPLICATION_CREDENTIALS
    if path and pathlib.Path(path).exists():
        creds = service_account.Credentials.from_service_account_file(path)
        project = settings.GOOGLE_CLOUD_PROJECT or creds.project_id
        return firestore.Client(project=project, credentials=creds)

    # 3) Fall back to ADC
    return firestore.Client(project=settings.GOOGLE_CLOUD_PROJECT)


class SubmissionStore:
    """Writes submission records to one Firestore collection."""

    def __init__(self, client: firestore.Client, collection: str = "submissions"):
        self.client = client
        self.collection = collection

    def insert(self, record: dict) -> list[dict]:
        """Insert one record and return it as stored, with its document id.

        The write is the only call made; created_at is the commit time of
        that write, which is what SERVER_TIMESTAMP resolves to.
        """
        try:
            doc_ref = self.client.collection(self.collection).document()
            result = doc_ref.set({**record, "created_at": firestore.SERVER_TIMESTAMP})
        except GoogleAPIError as e:
            logger.error("Insert into '%s' failed: %s", self.collection, e)
            raise PersistenceError(f"Database error: {getattr(e, 'message', None) or e}") from e

        update_time = getattr(result, "update_time", None)
        created_at = update_time.isoformat() if update_time is not None else None
        return [{"id": doc_ref.id, **record, "created_at": created_at}]
