"""Exceptions raised by the ledger core."""

from __future__ import annotations

from enum import Enum


class LedgerError(Exception):
    """Base exception for all splitledger errors."""

    pass


class SplitErrorCode(str, Enum):
    NO_PARTICIPANTS = "no_participants"
    INVALID_AMOUNT = "invalid_amount"
    DUPLICATE_PARTICIPANT = "duplicate_participant"
    INVALID_SHARE = "invalid_share"
    NEGATIVE_SHARE = "negative_share"
    TOTAL_MISMATCH = "total_mismatch"


class SplitValidationError(LedgerError, ValueError):
    """Raised when split input is rejected. The caller has to fix the input."""

    def __init__(self, code: SplitErrorCode, message: str):
        self.code = code
        super().__init__(message)


class UnknownParticipantError(LedgerError, ValueError):
    """Raised in strict mode when a record references someone outside the member list."""

    def __init__(self, participant: str, message: str | None = None):
        self.participant = participant
        super().__init__(message or f"Participant {participant!r} is not a member of this group")


class InvariantViolationError(LedgerError):
    """Raised in strict mode when a computed result fails its own verification."""

    def __init__(self, check: str, message: str | None = None):
        self.check = check
        super().__init__(message or f"Ledger invariant {check!r} does not hold")


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""

    pass
