import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seat_ledger.database.db import Base

if TYPE_CHECKING:
    from seat_ledger.models.events import Event


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id"), nullable=False, index=True)
    requester_id: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_count: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    event: Mapped["Event"] = relationship(back_populates="bookings")

    __table_args__ = (
        CheckConstraint("seat_count > 0", name="ck_bookings_seat_count_positive"),
        CheckConstraint("status IN ('confirmed', 'rejected')", name="ck_bookings_status"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, event={self.event_id}, seats={self.seat_count}, status={self.status})>"
