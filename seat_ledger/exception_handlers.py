"""Map ledger errors onto HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from seat_ledger.core.exceptions import LedgerError


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.exception("Ledger error: {}", exc.message)
    else:
        logger.error("Ledger error: {}", exc.message)  # caller mistake, no stack trace
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: {}", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


EXCEPTION_HANDLERS = {
    LedgerError: ledger_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
