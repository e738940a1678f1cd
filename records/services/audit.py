import logging
from typing import Optional, Any, Dict
from django.contrib.auth import get_user_model
from records.models import AuditEvent

User = get_user_model()
logger = logging.getLogger(__name__)


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[str]=None, detail: Optional[Dict[str, Any]]=None) -> Optional[AuditEvent]:
    """Record an audit event.  Failures are logged and never reach the caller."""
    try:
        return AuditEvent.objects.create(
            user=user if isinstance(user, User) else None,
            action=action,
            object_type=object_type,
            object_id=str(object_id) if object_id is not None else None,
            detail=detail or {},
        )
    except Exception:
        logger.exception("audit event %s could not be stored", action)
        return None
