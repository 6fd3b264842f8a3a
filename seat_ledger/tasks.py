from celery.signals import worker_process_init
from loguru import logger

from seat_ledger.core.celery_config import celery_app
from seat_ledger.core.exceptions import InvalidArgumentError, LockUnavailableError, NotFoundError
from seat_ledger.core.logging_config import configure_logging
from seat_ledger.database.db import SessionLocal
from seat_ledger.services.bookings import attempt_booking
from seat_ledger.services.reports import audit_event


@worker_process_init.connect
def _init_worker_logging(**kwargs):
    configure_logging()


@celery_app.task(bind=True, max_retries=3)
def attempt_booking_task(self, event_id: int, requester_id: int, seat_count: int):
    """Run a queued booking attempt. Only lock timeouts are retried."""
    db = SessionLocal()
    try:
        booking = attempt_booking(
            db,
            event_id=event_id,
            requester_id=requester_id,
            seat_count=seat_count,
        )
        return {
            "booking_id": booking.id,
            "event_id": booking.event_id,
            "seat_count": booking.seat_count,
            "status": booking.status,
        }
    except LockUnavailableError as exc:
        logger.warning("Lock busy for event {}, retrying booking attempt", event_id)
        raise self.retry(exc=exc, countdown=1)
    except (NotFoundError, InvalidArgumentError) as exc:
        logger.error("Queued booking for event {} refused: {}", event_id, exc.message)
        return {"error": type(exc).__name__, "detail": exc.message}
    finally:
        db.close()


@celery_app.task
def audit_event_task(event_id: int):
    db = SessionLocal()
    try:
        return audit_event(db, event_id)
    finally:
        db.close()
