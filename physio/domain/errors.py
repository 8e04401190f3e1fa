"""Errors raised by the program domain and logic layers (translated to HTTP codes by the API)."""


class MalformedPlanError(ValueError):
    """A plan from the Plan Source breaks the week-structure contract."""


class ProgressStateError(ValueError):
    """Stored progress is inconsistent with its plan or with its own derived fields."""


class ConcurrentUpdateError(ValueError):
    """The stored record changed since the caller last read it."""


class UserNotFoundError(LookupError):
    pass


__all__ = ["MalformedPlanError", "ProgressStateError", "ConcurrentUpdateError", "UserNotFoundError"]
