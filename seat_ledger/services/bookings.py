from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from seat_ledger.core.exceptions import InvalidArgumentError, NotFoundError
from seat_ledger.models.bookings import Booking, BookingStatus
from seat_ledger.models.events import MAX_INT, Event
from seat_ledger.services.events import get_event, is_storable_id
from seat_ledger.services.locks import EventLocks, get_event_locks


def validate_seat_count(seat_count: int) -> None:
    if isinstance(seat_count, bool) or not isinstance(seat_count, int) or seat_count <= 0:
        raise InvalidArgumentError(f"seat_count must be a positive integer, got {seat_count!r}")
    if seat_count > MAX_INT:
        raise InvalidArgumentError(f"seat_count must not exceed {MAX_INT}, got {seat_count!r}")


def validate_requester_id(requester_id: int) -> None:
    if not is_storable_id(requester_id):
        raise InvalidArgumentError(f"requester_id must be an integer between 1 and {MAX_INT}, got {requester_id!r}")


def attempt_booking(
    db: Session,
    *,
    event_id: int,
    requester_id: int,
    seat_count: int,
    locks: EventLocks | None = None,
) -> Booking:
    """
    Resolve one booking attempt to ``confirmed`` or ``rejected``.

    The capacity check and decrement run while the event's lock is held, and
    the decrement itself is a conditional UPDATE, so capacity can never go
    negative. Insufficient capacity is not an error: the returned booking is
    simply ``rejected``.
    """
    validate_seat_count(seat_count)
    validate_requester_id(requester_id)
    get_event(db, event_id)

    locks = locks or get_event_locks()
    with locks.hold(event_id):
        try:
            booking = _resolve_booking(db, event_id, requester_id, seat_count)
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(booking)
    logger.info(
        "Booking {} {} for event {} ({} seats, requester {})",
        booking.id,
        booking.status,
        event_id,
        seat_count,
        requester_id,
    )
    return booking


def _resolve_booking(db: Session, event_id: int, requester_id: int, seat_count: int) -> Booking:
    """Internal function to decide and record the booking within a transaction."""
    # Check capacity and decrement atomically
    stmt = (
        update(Event)
        .where(Event.id == event_id)
        .where(Event.available_capacity >= seat_count)
        .values(available_capacity=Event.available_capacity - seat_count)
        .execution_options(synchronize_session=False)
    )
    res = db.execute(stmt)
    status = BookingStatus.CONFIRMED if res.rowcount == 1 else BookingStatus.REJECTED  # type: ignore

    booking = Booking(
        event_id=event_id,
        requester_id=requester_id,
        seat_count=seat_count,
        status=status.value,
    )
    db.add(booking)
    db.flush()  # gets booking.id
    return booking


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id) if is_storable_id(booking_id) else None
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking


def list_event_bookings(
    db: Session,
    event_id: int,
    status: BookingStatus | None = None,
) -> list[Booking]:
    get_event(db, event_id)

    stmt = select(Booking).where(Booking.event_id == event_id)
    if status is not None:
        stmt = stmt.where(Booking.status == status.value)
    return list(db.scalars(stmt.order_by(Booking.id)))
