"""Celery task that moves expired groceries to the wasted set."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from gms.celery_app import app as celery_app
from gms.database import SessionLocal
from gms.exceptions import PersistenceError
from gms.models.user import User
from gms.services.grocery_store import GroceryStore
from gms.services.wastage_service import WastageService

logger = logging.getLogger(__name__)


def sweep_users(db: Session, as_of: datetime | None = None) -> dict:
    """Run the expiry sweep for every user.

    A failing user is logged and counted; the others are still swept.
    """
    as_of = as_of or datetime.now(UTC)
    service = WastageService(GroceryStore(db))
    stats = {"users": 0, "newly_wasted": 0, "failed_users": 0}

    user_ids = [user_id for (user_id,) in db.query(User.id).order_by(User.id).all()]
    for user_id in user_ids:
        stats["users"] += 1
        try:
            stats["newly_wasted"] += service.sweep_expired(user_id, as_of=as_of)
        except PersistenceError as e:
            stats["failed_users"] += 1
            logger.error(f"Expiry sweep failed for user {user_id}: {e}")

    return stats


@celery_app.task(name="gms.tasks.expiry_sweep.sweep_all_users")
def sweep_all_users() -> dict:
    """Mark expired groceries of all users as wasted.

    Runs daily via celery-beat.

    Returns:
        dict with sweep statistics
    """
    db: Session = SessionLocal()
    try:
        stats = sweep_users(db)
        logger.info(
            f"Expiry sweep done: {stats['newly_wasted']} groceries wasted "
            f"across {stats['users']} users ({stats['failed_users']} failed)"
        )
        return stats
    finally:
        db.close()
