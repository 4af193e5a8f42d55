"""Admin activity log - one row per admin mutation."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from eventgo.db.query import insert_row
from eventgo.db.tables import admin_activity_logs

logger = logging.getLogger(__name__)


def log_admin_action(
    db: Session,
    admin_id: str,
    action: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
) -> dict:
    logger.info("admin %s: %s %s %s", admin_id, action, entity_type or "", entity_id or "")
    return insert_row(db, admin_activity_logs, {
        "admin_id": admin_id,
        "action": action,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "details": details,
        "ip_address": ip_address,
    })
