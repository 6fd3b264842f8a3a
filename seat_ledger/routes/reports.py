from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from seat_ledger.database.db import get_db
from seat_ledger.schemas.events import EventStatsOut
from seat_ledger.schemas.reports import AuditOut, ReportOut
from seat_ledger.services.reports import audit_event, get_event_stats, get_overall_report

router = APIRouter(prefix="/report", tags=["reports"])


@router.get("", response_model=ReportOut)
def overall_report(db: Session = Depends(get_db)):
    """Aggregate report across all events."""
    return get_overall_report(db)


@router.get("/event/{event_id}", response_model=EventStatsOut)
def event_report(event_id: int, db: Session = Depends(get_db)):
    return get_event_stats(db, event_id)


@router.get("/event/{event_id}/audit", response_model=AuditOut)
def event_audit(event_id: int, db: Session = Depends(get_db)):
    """Check stored available capacity against the confirmed bookings."""
    return audit_event(db, event_id)
