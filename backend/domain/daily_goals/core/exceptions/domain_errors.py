"""Domain exceptions for daily goals.

Two families live here:

- ``DailyGoalsDomainError`` subclasses raised inside the domain (invalid
  input, storage adapter failures).
- ``GoalCalculationError`` subclasses, the closed taxonomy the
  orchestrator hands back inside ``GoalCalculationResult``. They are
  never raised out of the orchestrator.
"""

from enum import Enum
from typing import List, Optional, Sequence


class DailyGoalsDomainError(Exception):
    """Base exception for daily goals domain errors."""

    pass


class InvalidCalculationInputError(DailyGoalsDomainError):
    """Raised when calculation input validation fails."""

    def __init__(self, issues: Sequence[str]):
        super().__init__("; ".join(issues))
        self.issues: List[str] = list(issues)


class GoalStorageError(DailyGoalsDomainError):
    """Raised by storage adapters when goals cannot be persisted."""

    pass


class GoalErrorKind(str, Enum):
    """Kinds of the closed calculation error taxonomy."""

    PROFILE_NOT_FOUND = "profile_not_found"
    VALIDATION_FAILED = "validation_failed"
    CALCULATION_FAILED = "calculation_failed"
    STORAGE_FAILED = "storage_failed"
    UNEXPECTED_ERROR = "unexpected_error"


class GoalCalculationError(DailyGoalsDomainError):
    """Base of the errors returned by goal calculation.

    Attributes:
        kind: Taxonomy kind
        retryable: Whether repeating the same request may succeed
        user_id: User the calculation was for
    """

    kind: GoalErrorKind = GoalErrorKind.UNEXPECTED_ERROR
    retryable: bool = False

    def __init__(self, user_id: str, message: str):
        super().__init__(message)
        self.user_id = user_id


class ProfileNotFoundError(GoalCalculationError):
    """No profile exists for the user; caller should prompt profile completion."""

    kind = GoalErrorKind.PROFILE_NOT_FOUND

    def __init__(self, user_id: str):
        super().__init__(user_id, f"Profile not found for user: {user_id}")


class ValidationFailedError(GoalCalculationError):
    """Profile fields out of range; caller should prompt correction."""

    kind = GoalErrorKind.VALIDATION_FAILED

    def __init__(self, user_id: str, issues: Sequence[str]):
        super().__init__(
            user_id, f"Profile data failed validation: {'; '.join(issues)}"
        )
        self.issues: List[str] = list(issues)


class CalculationFailedError(GoalCalculationError):
    """Unexpected fault inside a calculator."""

    kind = GoalErrorKind.CALCULATION_FAILED
    retryable = True

    def __init__(self, user_id: str, cause: Optional[BaseException] = None):
        super().__init__(user_id, f"Goal calculation failed for user: {user_id}")
        self.cause = cause


class StorageFailedError(GoalCalculationError):
    """Goals were computed but could not be persisted."""

    kind = GoalErrorKind.STORAGE_FAILED
    retryable = True

    def __init__(self, user_id: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(user_id, f"Failed to store goals for user {user_id}{detail}")
        self.cause = cause


class UnexpectedGoalError(GoalCalculationError):
    """Anything not classified above."""

    kind = GoalErrorKind.UNEXPECTED_ERROR

    def __init__(self, user_id: str, cause: Optional[BaseException] = None):
        super().__init__(user_id, f"Unexpected error during goal calculation: {cause}")
        self.cause = cause
