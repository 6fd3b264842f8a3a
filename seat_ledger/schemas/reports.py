from pydantic import BaseModel, Field


class ReportOut(BaseModel):
    total_capacity: int = Field(serialization_alias="totalCapacity")
    total_available: int = Field(serialization_alias="totalAvailable")
    total_confirmed_seats: int = Field(serialization_alias="totalConfirmedSeats")
    total_confirmed: int = Field(serialization_alias="totalConfirmed")
    total_rejected: int = Field(serialization_alias="totalRejected")


class AuditOut(BaseModel):
    event_id: int = Field(serialization_alias="eventId")
    expected_available: int = Field(serialization_alias="expectedAvailable")
    available_capacity: int = Field(serialization_alias="availableCapacity")
    consistent: bool
