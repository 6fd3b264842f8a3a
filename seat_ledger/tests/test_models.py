"""
Test database models (Event and Booking).
"""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from seat_ledger.models.bookings import Booking, BookingStatus
from seat_ledger.models.events import Event


class TestEventModel:
    """Test the Event model."""

    def test_create_event(self, db_session: Session):
        event = Event(title="Test Event", total_capacity=100, available_capacity=100)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert event.id is not None
        assert event.title == "Test Event"
        assert event.total_capacity == 100
        assert event.available_capacity == 100
        assert event.created_at is not None

    def test_zero_capacity_event_is_allowed(self, db_session: Session):
        event = Event(title="Closed", total_capacity=0, available_capacity=0)
        db_session.add(event)
        db_session.commit()

        assert event.id is not None

    def test_event_relationship_with_bookings(self, make_event, db_session: Session):
        event = make_event(title="Concert", capacity=50)

        db_session.add_all([
            Booking(event_id=event.id, requester_id=1, seat_count=2, status=BookingStatus.CONFIRMED.value),
            Booking(event_id=event.id, requester_id=2, seat_count=1, status=BookingStatus.REJECTED.value),
        ])
        db_session.commit()
        db_session.refresh(event)

        assert len(event.bookings) == 2
        assert [b.requester_id for b in event.bookings] == [1, 2]

    def test_available_capacity_cannot_go_negative(self, db_session: Session):
        db_session.add(Event(title="Broken", total_capacity=5, available_capacity=-1))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_available_capacity_cannot_exceed_total(self, db_session: Session):
        db_session.add(Event(title="Broken", total_capacity=5, available_capacity=6))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()


class TestBookingModel:
    """Test the Booking model."""

    def test_create_booking(self, make_event, db_session: Session):
        event = make_event(title="Festival", capacity=200)

        booking = Booking(
            event_id=event.id,
            requester_id=42,
            seat_count=3,
            status=BookingStatus.CONFIRMED.value,
        )
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)

        assert booking.id is not None
        assert booking.event_id == event.id
        assert booking.requester_id == 42
        assert booking.seat_count == 3
        assert booking.status == BookingStatus.CONFIRMED.value
        assert booking.created_at is not None

    def test_booking_relationship_with_event(self, make_event, db_session: Session):
        event = make_event(title="Conference", capacity=500)

        booking = Booking(event_id=event.id, requester_id=10, seat_count=1, status=BookingStatus.CONFIRMED.value)
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)

        assert booking.event.title == "Conference"
        assert booking.event.total_capacity == 500

    @pytest.mark.parametrize("seat_count", [0, -2])
    def test_seat_count_must_be_positive(self, make_event, db_session: Session, seat_count: int):
        event = make_event()
        db_session.add(Booking(event_id=event.id, requester_id=1, seat_count=seat_count, status="confirmed"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_unknown_status_is_refused(self, make_event, db_session: Session):
        event = make_event()
        db_session.add(Booking(event_id=event.id, requester_id=1, seat_count=1, status="PENDING"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
