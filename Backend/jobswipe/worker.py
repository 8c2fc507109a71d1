# backend/jobswipe/worker.py
import logging
from celery import Celery

from jobswipe.config import settings
from jobswipe.db.session import SessionLocal
from jobswipe.services.events import dispatch_pending

logger = logging.getLogger(__name__)

celery_app = Celery(
    "jobswipe",
    broker=settings.CELERY_BROKER_URL,
)

# The HTTP handlers dispatch right after each response; this sweep picks up
# whatever those attempts left pending.
celery_app.conf.beat_schedule = {
    "dispatch-outbox": {
        "task": "jobswipe.dispatch_outbox",
        "schedule": float(settings.OUTBOX_SWEEP_SECONDS),
    },
}


@celery_app.task(name="jobswipe.dispatch_outbox")
def dispatch_outbox_task(limit: int = 100) -> int:
    """
    Celery task delivering pending outbox events as notifications.
    """
    delivered = dispatch_pending(SessionLocal, limit=limit)
    logger.info(f"Celery worker: outbox sweep delivered {delivered} event(s)")
    return delivered
