"""Custom exceptions for the Finsight projection engine.

This module provides a hierarchy of exception classes for consistent error
handling across the engines and the life-stage simulator. All exceptions
inherit from FinsightError, making it easy to catch all engine-specific
errors.

Example:
    try:
        result = engine.simulate(debts, PayoffStrategy.AVALANCHE, extra)
    except InvalidInputError as e:
        # Ask the user to fix the offending field
        show_field_error(e.field, e.constraint)
    except FinsightError as e:
        # Handle any engine-related error
        logger.error("projection_failed", error=str(e))
"""

from typing import Any, Optional


class FinsightError(Exception):
    """Base exception for all Finsight errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all Finsight-specific errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise FinsightError("Something went wrong", details={"code": 500})
        FinsightError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize FinsightError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error is potentially recoverable through
                corrected input or a different call sequence. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class InvalidInputError(FinsightError):
    """Error raised when a numeric precondition is violated.

    Raised synchronously by the amortization and growth engines for
    negative balances, negative rates, negative payments or a time horizon
    shorter than one year. Never retried by the engines themselves.

    The input models carry the same constraints as field validators, so
    building a ``Debt`` or ``InvestmentInputs`` with a negative amount
    raises ``pydantic.ValidationError`` at construction instead. This
    error covers values that reach an engine anyway: models mutated
    after construction, models built with ``model_construct``, and plain
    arguments such as ``extra_payment`` or a new job's salary. Callers
    that build models from user input should catch both.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
        constraint: The validation constraint that was violated.

    Example:
        >>> raise InvalidInputError(
        ...     "Debt balance cannot be negative",
        ...     field="balance",
        ...     value=Decimal("-10"),
        ...     constraint=">= 0",
        ... )
        InvalidInputError: Debt balance cannot be negative
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize InvalidInputError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by user correction.
                Defaults to True since input errors are fixed by the caller.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class InvalidStateTransitionError(FinsightError):
    """Error raised when the simulator is asked for an illegal transition.

    For example pausing a simulation that was never started, or resuming
    one that is already running. These are programming errors in the
    caller and are reported instead of being silently ignored.

    Attributes:
        current_state: The state the simulator was in.
        attempted: The operation that was attempted.

    Example:
        >>> raise InvalidStateTransitionError(
        ...     "Cannot pause from setup",
        ...     current_state="setup",
        ...     attempted="pause",
        ... )
        InvalidStateTransitionError: Cannot pause from setup
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: Optional[str] = None,
        attempted: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize InvalidStateTransitionError.

        Args:
            message: Human-readable error description.
            current_state: Name of the state the simulator was in.
            attempted: Name of the rejected operation.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False; the call sequence must change.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.current_state = current_state
        self.attempted = attempted

        if current_state:
            self.details["current_state"] = current_state
        if attempted:
            self.details["attempted"] = attempted


class ConfigurationError(FinsightError):
    """Error raised when configuration is invalid or inconsistent.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Display window exceeds simulation cutoff",
        ...     config_key="display_months",
        ...     expected="<= max_months",
        ...     actual=720,
        ... )
        ConfigurationError: Display window exceeds simulation cutoff
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Defaults to False since configuration errors
                require the settings to be changed.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "FinsightError",
    "InvalidInputError",
    "InvalidStateTransitionError",
    "ConfigurationError",
]
