"""Domain exceptions for daily goals."""

from .domain_errors import (
    CalculationFailedError,
    DailyGoalsDomainError,
    GoalCalculationError,
    GoalErrorKind,
    GoalStorageError,
    InvalidCalculationInputError,
    ProfileNotFoundError,
    StorageFailedError,
    UnexpectedGoalError,
    ValidationFailedError,
)

__all__ = [
    "DailyGoalsDomainError",
    "InvalidCalculationInputError",
    "GoalStorageError",
    "GoalErrorKind",
    "GoalCalculationError",
    "ProfileNotFoundError",
    "ValidationFailedError",
    "CalculationFailedError",
    "StorageFailedError",
    "UnexpectedGoalError",
]
