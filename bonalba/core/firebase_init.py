import logging
import os
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from .config import settings

logger = logging.getLogger(__name__)

_credential_source: Optional[str] = None


def _load_credentials():
    """Service-account file first, then Application Default Credentials."""
    path = settings.FIREBASE_SERVICE_ACCOUNT_PATH
    if path and os.path.exists(path):
        return credentials.Certificate(path), f"service account ({path})"
    if os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
        return credentials.ApplicationDefault(), "application default"
    return None, None


def initialize_firebase() -> bool:
    """
    Initialize the Firebase Admin app once per process.
    Returns False (and logs why) when no credentials are available.
    """
    global _credential_source

    if firebase_admin._apps:
        return True

    try:
        cred, source = _load_credentials()
        if cred is None:
            logger.warning(
                f"No Firebase credentials: {settings.FIREBASE_SERVICE_ACCOUNT_PATH} not found "
                "and GOOGLE_APPLICATION_CREDENTIALS is not set"
            )
            return False

        firebase_admin.initialize_app(cred, {"projectId": settings.FIREBASE_PROJECT_ID})
        _credential_source = source
        logger.info(f"Firebase initialized for project {settings.FIREBASE_PROJECT_ID} using {source}")
        return True

    except Exception as e:
        logger.error(f"Firebase initialization failed: {e}")
        return False


def is_firebase_available() -> bool:
    return bool(firebase_admin._apps)


def get_firebase_status() -> dict:
    return {
        "available": is_firebase_available(),
        "project_id": settings.FIREBASE_PROJECT_ID,
        "credentials": _credential_source,
    }
