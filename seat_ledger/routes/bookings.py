from celery.result import AsyncResult
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from seat_ledger.core.celery_config import celery_app
from seat_ledger.database.db import get_db
from seat_ledger.schemas.bookings import BookingOut, BookingTaskOut, BookRequest
from seat_ledger.services.bookings import (
    attempt_booking,
    get_booking,
    validate_requester_id,
    validate_seat_count,
)
from seat_ledger.services.events import get_event
from seat_ledger.services.locks import EventLocks, get_event_locks
from seat_ledger.tasks import attempt_booking_task

router = APIRouter(prefix="/book", tags=["bookings"])


@router.post("", response_model=BookingOut)
def book_seats(
    payload: BookRequest,
    db: Session = Depends(get_db),
    locks: EventLocks = Depends(get_event_locks),
):
    # A rejected booking is a normal answer, not an HTTP error
    return attempt_booking(
        db,
        event_id=payload.event_id,
        requester_id=payload.user_id,
        seat_count=payload.seat_count,
        locks=locks,
    )


@router.post("/async", response_model=BookingTaskOut, status_code=status.HTTP_202_ACCEPTED)
def book_seats_async(payload: BookRequest, db: Session = Depends(get_db)):
    validate_seat_count(payload.seat_count)
    validate_requester_id(payload.user_id)
    get_event(db, payload.event_id)

    result = attempt_booking_task.delay(payload.event_id, payload.user_id, payload.seat_count)
    return {"task_id": result.id, "status": "PENDING"}


@router.get("/tasks/{task_id}", response_model=BookingTaskOut)
def booking_task_status(task_id: str):
    result = AsyncResult(task_id, app=celery_app)
    if not result.ready():
        return {"task_id": task_id, "status": result.state}
    if result.failed():
        return {
            "task_id": task_id,
            "status": result.state,
            "result": {"error": type(result.result).__name__, "detail": str(result.result)},
        }
    return {"task_id": task_id, "status": result.state, "result": result.result}


@router.get("/{booking_id}", response_model=BookingOut)
def read_booking(booking_id: int, db: Session = Depends(get_db)):
    return get_booking(db, booking_id)
