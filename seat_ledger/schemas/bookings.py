from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from seat_ledger.models.bookings import BookingStatus


class BookRequest(BaseModel):
    # Ranges are checked by the ledger so every entry point reports them the same way
    event_id: int = Field(validation_alias=AliasChoices("eventId", "event_id"))
    user_id: int = Field(validation_alias=AliasChoices("userId", "user_id"))
    seat_count: int = Field(validation_alias=AliasChoices("seatCount", "seat_count"))


class BookingOut(BaseModel):
    booking_id: int = Field(validation_alias="id", serialization_alias="bookingId")
    event_id: int = Field(serialization_alias="eventId")
    user_id: int = Field(validation_alias="requester_id", serialization_alias="userId")
    seat_count: int = Field(serialization_alias="seatCount")
    status: BookingStatus
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")

    class Config:
        from_attributes = True


class BookingTaskOut(BaseModel):
    task_id: str = Field(serialization_alias="taskId")
    status: str
    result: dict | None = None
