from sqlalchemy import select
from sqlalchemy.orm import Session

from seat_ledger.core.exceptions import InvalidArgumentError, NotFoundError
from seat_ledger.models.events import MAX_INT, Event


def is_storable_id(value: int) -> bool:
    """Primary keys are positive and fit the INTEGER column."""
    return not isinstance(value, bool) and isinstance(value, int) and 1 <= value <= MAX_INT


def create_event(db: Session, *, title: str, capacity: int) -> Event:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or not 0 <= capacity <= MAX_INT:
        raise InvalidArgumentError(f"capacity must be an integer between 0 and {MAX_INT}, got {capacity!r}")

    event = Event(title=title, total_capacity=capacity, available_capacity=capacity)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def get_event(db: Session, event_id: int) -> Event:
    # Ids outside the key range cannot exist, and would overflow the driver
    event = db.get(Event, event_id) if is_storable_id(event_id) else None
    if event is None:
        raise NotFoundError(f"Event {event_id} not found")
    return event


def list_events(db: Session) -> list[Event]:
    return list(db.scalars(select(Event).order_by(Event.id)))
