from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from seat_ledger.models.bookings import Booking, BookingStatus
from seat_ledger.models.events import Event
from seat_ledger.services.events import get_event


def _status_counts(db: Session, event_id: int | None = None) -> dict[str, tuple[int, int]]:
    """Map status -> (booking count, seat sum)."""
    stmt = select(Booking.status, func.count(Booking.id), func.sum(Booking.seat_count)).group_by(Booking.status)
    if event_id is not None:
        stmt = stmt.where(Booking.event_id == event_id)
    return {status: (int(count or 0), int(seats or 0)) for status, count, seats in db.execute(stmt)}


def get_event_stats(db: Session, event_id: int) -> dict:
    event = get_event(db, event_id)

    counts = _status_counts(db, event_id)
    confirmed_count, confirmed_seats = counts.get(BookingStatus.CONFIRMED.value, (0, 0))
    rejected_count, _ = counts.get(BookingStatus.REJECTED.value, (0, 0))

    return {
        "event_id": event.id,
        "total_capacity": event.total_capacity,
        "available_capacity": event.available_capacity,
        "confirmed_seats": confirmed_seats,
        "confirmed_count": confirmed_count,
        "rejected_count": rejected_count,
    }


def get_overall_report(db: Session) -> dict:
    """Return aggregated totals across all events."""
    total_capacity = db.scalar(select(func.sum(Event.total_capacity)))
    total_available = db.scalar(select(func.sum(Event.available_capacity)))

    counts = _status_counts(db)
    confirmed_count, confirmed_seats = counts.get(BookingStatus.CONFIRMED.value, (0, 0))
    rejected_count, _ = counts.get(BookingStatus.REJECTED.value, (0, 0))

    return {
        "total_capacity": int(total_capacity or 0),
        "total_available": int(total_available or 0),
        "total_confirmed_seats": confirmed_seats,
        "total_confirmed": confirmed_count,
        "total_rejected": rejected_count,
    }


def audit_event(db: Session, event_id: int) -> dict:
    """Re-derive available capacity from confirmed bookings and compare with the stored value."""
    stats = get_event_stats(db, event_id)
    expected = stats["total_capacity"] - stats["confirmed_seats"]
    consistent = expected == stats["available_capacity"]
    if not consistent:
        logger.warning(
            "Ledger mismatch on event {}: stored available={}, derived available={}",
            event_id,
            stats["available_capacity"],
            expected,
        )

    return {
        "event_id": event_id,
        "expected_available": expected,
        "available_capacity": stats["available_capacity"],
        "consistent": consistent,
    }
