"""Ledger errors. Each carries the HTTP status the API answers with."""


class LedgerError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(LedgerError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class InvalidArgumentError(LedgerError):
    def __init__(self, message: str):
        super().__init__(message, 422)


class LockUnavailableError(LedgerError):
    """The per-event lock could not be taken in time. Safe to retry."""

    def __init__(self, message: str):
        super().__init__(message, 503)
