from __future__ import annotations

from enum import Enum


class MiningExhausted(RuntimeError):
    """No salt satisfied the acceptance predicate within the attempt budget."""

    def __init__(self, attempts: int, message: str | None = None):
        self.attempts = attempts
        super().__init__(message or f"No valid salt found within {attempts} attempts")


class PredictionFailed(RuntimeError):
    """The external token-address predictor could not evaluate a candidate salt."""

    def __init__(self, salt: bytes, attempt: int, cause: Exception):
        self.salt = salt
        self.attempt = attempt
        self.cause = cause
        super().__init__(
            f"Token prediction failed for salt 0x{salt.hex()} (attempt {attempt}): {cause}"
        )


class InvalidSchedule(ValueError):
    pass


class CurveErrorKind(str, Enum):
    NON_MONOTONIC_TICKS = "non_monotonic_ticks"
    NON_POSITIVE_FIELD = "non_positive_field"
    SHARES_EXCEED_TOTAL = "shares_exceed_total"


class CurveError(ValueError):
    def __init__(self, kind: CurveErrorKind, index: int | None, message: str):
        self.kind = kind
        self.index = index
        where = f"curve {index}: " if index is not None else ""
        super().__init__(f"{where}{message}")
