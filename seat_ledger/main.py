from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from seat_ledger.core.logging_config import configure_logging
from seat_ledger.database.db import Base, engine, get_db, wait_for_db
from seat_ledger.exception_handlers import register_exception_handlers
from seat_ledger.routes import bookings, events, reports


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    wait_for_db(engine)
    # Create all tables (in production, use migrations such as Alembic)
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Seat Ledger", lifespan=lifespan)

# Configure CORS
origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include the routers
app.include_router(events.router)
app.include_router(bookings.router)
app.include_router(reports.router)


@app.get("/health", tags=["health"])
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
