import json
import logging
from datetime import datetime

import firebase_admin
from firebase_admin import auth, credentials, db as rtdb, firestore
from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore import DocumentReference, GeoPoint

import config

logger = logging.getLogger(__name__)

_firebase_app = None


class UpstreamServiceError(Exception):
    """The identity provider or one of the Firebase stores failed."""


def init_firebase():
    """
    Initialize the Firebase Admin app from FIREBASE_SERVICE_ACCOUNT.
    Safe to call more than once; a missing or invalid service account is fatal.
    """
    global _firebase_app
    if _firebase_app is not None:
        return _firebase_app

    raw = config.FIREBASE_SERVICE_ACCOUNT
    if not raw:
        raise RuntimeError("FIREBASE_SERVICE_ACCOUNT environment variable is not set")
    if not config.FIREBASE_DATABASE_URL:
        raise RuntimeError("FIREBASE_DATABASE_URL environment variable is not set")

    try:
        service_account = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {e}") from e

    # .env files usually carry the key with escaped newlines
    if isinstance(service_account.get("private_key"), str):
        service_account["private_key"] = service_account["private_key"].replace("\\n", "\n")

    cred = credentials.Certificate(service_account)
    _firebase_app = firebase_admin.initialize_app(cred, {"databaseURL": config.FIREBASE_DATABASE_URL})
    logger.info(f"Firebase Admin SDK initialized for project {service_account.get('project_id')}")
    return _firebase_app


class RealtimeStore:
    """Path-addressed access to the Realtime Database (users, attendance, leaves, alerts)."""

    def __init__(self, app=None):
        self._app = app

    def _ref(self, path: str):
        return rtdb.reference(path, app=self._app)

    def read(self, path: str):
        try:
            return self._ref(path).get()
        except (FirebaseError, ValueError) as e:
            raise UpstreamServiceError(str(e)) from e

    def write(self, path: str, value) -> None:
        try:
            self._ref(path).set(value)
        except (FirebaseError, ValueError) as e:
            raise UpstreamServiceError(str(e)) from e

    def update(self, path: str, values: dict) -> None:
        try:
            self._ref(path).update(values)
        except (FirebaseError, ValueError) as e:
            raise UpstreamServiceError(str(e)) from e

    def push(self, path: str, value) -> str:
        """Append value under a generated key and return the key."""
        try:
            return self._ref(path).push(value).key
        except (FirebaseError, ValueError) as e:
            raise UpstreamServiceError(str(e)) from e


class DocumentStore:
    """Read access to the Firestore collections (performance, sales, projects)."""

    def __init__(self, app=None):
        self._client = firestore.client(app=app)

    def list_collection(self, name: str) -> list[dict]:
        try:
            return [
                {"id": doc.id, **plain_value(doc.to_dict() or {})}
                for doc in self._client.collection(name).stream()
            ]
        except GoogleAPIError as e:
            raise UpstreamServiceError(str(e)) from e


class IdentityProvider:
    """Firebase Authentication account management."""

    def __init__(self, app=None):
        self._app = app

    def create_account(self, email: str, password: str, display_name: str | None = None) -> str:
        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                app=self._app,
            )
        except (FirebaseError, ValueError) as e:
            # ValueError: the SDK rejects malformed emails / weak passwords before calling out
            raise UpstreamServiceError(str(e)) from e
        return user.uid


def plain_value(value):
    """Firestore value -> JSON-ready value (GeoPoint, references and timestamps included)."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return {k: plain_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_value(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, DocumentReference):
        return value.path
    return str(value)
