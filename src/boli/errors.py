"""Domain errors raised by the ledger services.

Each error carries the HTTP status the API maps it to, so services stay free of
FastAPI imports.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger errors surfaced to callers."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(LedgerError):
    """Referenced profile, entry, link or catalog row does not exist."""

    status_code = 404


class ConflictError(LedgerError):
    """A uniqueness constraint rejected a creation the caller must hear about."""

    status_code = 409


class ValidationError(LedgerError):
    """Input rejected before any mutation."""

    status_code = 422


class ForbiddenError(LedgerError):
    """The acting user may not change another user's data."""

    status_code = 403
