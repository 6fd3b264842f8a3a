from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from seat_ledger.database.db import get_db
from seat_ledger.models.bookings import BookingStatus
from seat_ledger.schemas.bookings import BookingOut
from seat_ledger.schemas.events import EventCreate, EventOut, EventStatsOut
from seat_ledger.services import events as event_service
from seat_ledger.services.bookings import list_event_bookings
from seat_ledger.services.reports import get_event_stats

router = APIRouter(prefix="/event", tags=["events"])


@router.post("", response_model=EventOut, status_code=201)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    return event_service.create_event(db, title=payload.title, capacity=payload.capacity)


@router.get("", response_model=list[EventOut])
def list_events(db: Session = Depends(get_db)):
    return event_service.list_events(db)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, db: Session = Depends(get_db)):
    return event_service.get_event(db, event_id)


@router.get("/{event_id}/stats", response_model=EventStatsOut)
def event_stats(event_id: int, db: Session = Depends(get_db)):
    return get_event_stats(db, event_id)


@router.get("/{event_id}/bookings", response_model=list[BookingOut])
def event_bookings(
    event_id: int,
    status: BookingStatus | None = None,
    db: Session = Depends(get_db),
):
    return list_event_bookings(db, event_id, status=status)
