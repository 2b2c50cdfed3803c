"""
Firebase client handles, built once at start-up and kept on ``app.state``.
Import *get_db* as a FastAPI dependency in route handlers.
"""
import logging
from dataclasses import dataclass

import firebase_admin
from fastapi import Request
from firebase_admin import credentials, firestore
from google.cloud.firestore import Client

from app.core.config import Settings
from app.core.security import TokenVerifier

logger = logging.getLogger(__name__)


@dataclass
class FirebaseClients:
    app: firebase_admin.App
    db: Client
    verifier: TokenVerifier

    def close(self) -> None:
        firebase_admin.delete_app(self.app)


def init_firebase(settings: Settings, name: str = "[DEFAULT]") -> FirebaseClients:
    """
    Initialise the admin SDK and the clients derived from it.

    Uses the service-account file when configured, otherwise application
    default credentials (Cloud Run, emulator, gcloud login).
    """
    if settings.FIREBASE_CREDENTIALS_FILE:
        cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_FILE)
    else:
        cred = credentials.ApplicationDefault()

    options = {}
    if settings.FIREBASE_PROJECT_ID:
        options["projectId"] = settings.FIREBASE_PROJECT_ID

    fb_app = firebase_admin.initialize_app(cred, options=options, name=name)
    logger.info("Firebase app %r initialised (project=%s)", name, fb_app.project_id)
    return FirebaseClients(
        app=fb_app,
        db=firestore.client(fb_app),
        verifier=TokenVerifier(fb_app, check_revoked=settings.CHECK_REVOKED_TOKENS),
    )


def get_db(request: Request) -> Client:
    """
    FastAPI dependency returning the shared Firestore client.

    Usage:
        @router.get("/items")
        def list_items(db: Client = Depends(get_db)):
            ...
    """
    return request.app.state.firebase.db


def get_token_verifier(request: Request) -> TokenVerifier:
    """FastAPI dependency returning the shared ID token verifier."""
    return request.app.state.firebase.verifier
