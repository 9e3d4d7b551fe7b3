"""
Firebase Admin SDK client handle for authentication and Firestore access.

One FirebaseClient is created when the careers app starts and closed at
process exit. Callers receive it through the service container instead of
reaching for module-level globals.
"""
import os
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, auth, firestore

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = 'skillpath'


class FirebaseClient:
    """Lazily initialized Firebase app with Firestore and token verification."""

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        project_id: Optional[str] = None,
        app_name: str = DEFAULT_APP_NAME,
    ):
        self.credentials_path = credentials_path
        self.project_id = project_id
        self.app_name = app_name
        self._app: Optional[firebase_admin.App] = None
        self._db = None
        self._closed = False

    @classmethod
    def from_settings(cls, settings) -> 'FirebaseClient':
        return cls(
            credentials_path=getattr(settings, 'FIREBASE_CREDENTIALS', None) or os.environ.get('FIREBASE_CREDENTIALS'),
            project_id=getattr(settings, 'FIREBASE_PROJECT_ID', None),
        )

    def start(self) -> Optional[firebase_admin.App]:
        """
        Initialize the Firebase app.

        Returns:
            Firebase app instance or None if initialization fails
        """
        if self._app is not None:
            return self._app

        if self._closed:
            logger.warning("Firebase client has been closed; refusing to reinitialize")
            return None

        if not self.credentials_path:
            logger.warning("FIREBASE_CREDENTIALS not set; Firestore and token verification are disabled")
            return None

        if not os.path.exists(self.credentials_path):
            logger.error(f"Firebase credentials file not found at: {self.credentials_path}")
            return None

        try:
            cred = credentials.Certificate(self.credentials_path)
            options = {'projectId': self.project_id} if self.project_id else None
            self._app = firebase_admin.initialize_app(cred, options, name=self.app_name)
            logger.info("Firebase Admin SDK initialized successfully")
            return self._app
        except (ValueError, IOError) as e:
            logger.error(f"Failed to initialize Firebase: {e}")
            return None

    @property
    def db(self):
        """Firestore client, or None when Firebase is not configured."""
        if self._db is not None:
            return self._db

        app = self.start()
        if app is None:
            return None

        try:
            self._db = firestore.client(app=app)
            return self._db
        except ValueError as e:
            logger.error(f"Failed to get Firestore client: {e}")
            return None

    def verify_token(self, id_token: str) -> Optional[dict]:
        """
        Verify a Firebase ID token.

        Args:
            id_token: Firebase ID token from client

        Returns:
            Decoded token claims or None if verification fails
        """
        app = self.start()
        if app is None:
            return None

        try:
            return auth.verify_id_token(id_token, app=app)
        except (ValueError, auth.InvalidIdTokenError, auth.CertificateFetchError) as e:
            logger.error(f"Token verification failed: {e}")
            return None

    @property
    def configured(self) -> bool:
        return self.start() is not None

    def close(self) -> None:
        """Release the Firebase app. Safe to call more than once."""
        self._closed = True
        if self._db is not None:
            self._db.close()
            self._db = None
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            logger.info("Firebase Admin SDK shut down")
            self._app = None
