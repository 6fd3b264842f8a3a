from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seat_ledger.database.db import Base

# Largest value an INTEGER column holds on every supported backend
MAX_INT = 2**31 - 1

if TYPE_CHECKING:
    from seat_ledger.models.bookings import Booking


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    total_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Only mutable column; decremented by the ledger on each confirmed booking
    available_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    bookings: Mapped[list["Booking"]] = relationship(back_populates="event", order_by="Booking.id")

    __table_args__ = (
        CheckConstraint("total_capacity >= 0", name="ck_events_total_capacity_non_negative"),
        CheckConstraint("available_capacity >= 0", name="ck_events_available_non_negative"),
        CheckConstraint("available_capacity <= total_capacity", name="ck_events_available_lte_total"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, available={self.available_capacity}/{self.total_capacity})>"
