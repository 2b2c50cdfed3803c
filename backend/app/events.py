"""
Background-function entry point for Firebase Authentication events.

Deploy ``handle_auth_event`` as the target of the user-create and
user-delete triggers; the runtime calls it with ``(data, context)`` where
*data* is the user record and ``context.event_type`` names the event.
Clients are built on the first event and reused by the warm instance.
"""
import logging
from functools import lru_cache
from typing import Any

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.client import FirebaseClients, init_firebase
from app.services.lifecycle_service import dispatch_auth_event

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_clients() -> FirebaseClients:
    configure_logging(settings.LOG_LEVEL)
    return init_firebase(settings)


def handle_auth_event(data: dict[str, Any], context: Any) -> None:
    """Run the lifecycle hook for one auth event. Never raises on hook failure."""
    event_type = getattr(context, "event_type", "")
    logger.info("Auth event %s (event_id=%s)", event_type, getattr(context, "event_id", None))
    dispatch_auth_event(get_clients().db, event_type, data)
