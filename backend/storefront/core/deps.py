"""
storefront/core/deps.py - Process-wide collaborators.

`Dependencies` bundles the settings, the Razorpay gateway and the Firestore client.
It is built once at startup (`init_dependencies`), kept on `app.state.deps` and
handed to request handlers through `Depends(get_deps)`. `close()` tears it down
at shutdown.

Firestore is optional at runtime: if initialization or the connectivity check
fails, `db` stays None and the checkout endpoints skip their document writes.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import firebase_admin
from fastapi import Request
from firebase_admin import credentials, firestore

from storefront.config import Settings
from storefront.integrations.payment import RazorpayGateway

logger = logging.getLogger("storefront.deps")


@dataclass
class Dependencies:
    settings: Settings
    gateway: Any
    db: Optional[Any] = None
    firebase_initialized: bool = False
    firebase_app: Optional[Any] = None

    def close(self) -> None:
        close = getattr(self.gateway, "close", None)
        if callable(close):
            close()
        if self.db is not None and hasattr(self.db, "close"):
            try:
                self.db.close()
            except Exception:
                logger.warning("Firestore client close failed", exc_info=True)
        if self.firebase_app is not None:
            firebase_admin.delete_app(self.firebase_app)
        self.db = None
        self.firebase_app = None
        self.firebase_initialized = False


def _firebase_credential(settings: Settings):
    if settings.firebase_env_credentials():
        return credentials.Certificate(settings.service_account_info())
    # Use service account file (local development)
    return credentials.Certificate(settings.firebase_cred_file)


def init_firebase_app(settings: Settings):
    try:
        app = firebase_admin.initialize_app(_firebase_credential(settings), {
            "projectId": settings.firebase_project_id,
            "storageBucket": f"{settings.firebase_project_id}.appspot.com",
        })
        logger.info("Firebase Admin SDK initialized")
    except ValueError as e:
        if "already exists" in str(e):
            # Firebase app already initialized, get the default app
            app = firebase_admin.get_app()
        else:
            raise
    return app


def check_firestore(db, timeout: float) -> None:
    """Bounded read; a timeout counts as an initialization failure."""
    db.collection("test").document("connection-test").get(timeout=timeout)


def init_dependencies(settings: Settings) -> Dependencies:
    gateway = RazorpayGateway(
        key_id=settings.razorpay_key_id,
        key_secret=settings.razorpay_key_secret,
        base_url=settings.razorpay_base_url,
        timeout=settings.razorpay_timeout,
    )
    deps = Dependencies(settings=settings, gateway=gateway)
    logger.info("Initializing Firebase Admin...")
    try:
        deps.firebase_app = init_firebase_app(settings)
        deps.db = firestore.client(deps.firebase_app)
        check_firestore(deps.db, settings.firebase_connect_timeout)
        deps.firebase_initialized = True
        logger.info("Successfully connected to Firestore")
    except Exception as e:
        logger.error("Firebase initialization failed: %s", e)
        if deps.db is not None:
            deps.db.close()
        deps.db = None
        deps.firebase_initialized = False
    return deps


def get_deps(request: Request) -> Dependencies:
    return request.app.state.deps
