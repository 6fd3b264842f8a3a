from datetime import datetime

from pydantic import BaseModel, Field

from seat_ledger.models.events import MAX_INT


# ---------- Event ----------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    capacity: int = Field(ge=0, le=MAX_INT)


class EventOut(BaseModel):
    id: int
    title: str
    total_capacity: int = Field(serialization_alias="totalCapacity")
    available_capacity: int = Field(serialization_alias="availableCapacity")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")

    class Config:
        from_attributes = True


class EventStatsOut(BaseModel):
    event_id: int = Field(serialization_alias="eventId")
    total_capacity: int = Field(serialization_alias="totalCapacity")
    available_capacity: int = Field(serialization_alias="availableCapacity")
    confirmed_seats: int = Field(serialization_alias="confirmedSeats")
    confirmed_count: int = Field(serialization_alias="confirmedCount")
    rejected_count: int = Field(serialization_alias="rejectedCount")
