"""Custom exceptions used throughout the microbit_sim package."""

from typing import Any, Optional


class SimulatorError(Exception):
    """Base exception for all simulator errors.

    All simulator-specific exceptions should inherit from this class.
    This allows catching all simulator errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(SimulatorError):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Configuration validation failures
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class InvalidPinError(SimulatorError):
    """Raised when a script references a pin the board does not have.

    Examples:
    - digital_write_pin("P99", 1) on a board with pins P0..P20
    """

    def __init__(self, pin: object, details: Optional[dict[str, Any]] = None):
        details = details or {}
        details["pin"] = pin
        super().__init__(message=f"Invalid pin: {pin!r}", details=details)
        self.pin = pin


class OutOfRangeError(SimulatorError):
    """Raised when an LED coordinate lies outside the matrix."""

    def __init__(
        self,
        x: int,
        y: int,
        width: int = 5,
        height: int = 5,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details.update({"x": x, "y": y})
        message = (
            f"LED coordinate ({x}, {y}) out of range "
            f"[0-{width - 1}] x [0-{height - 1}]"
        )
        super().__init__(message=message, details=details)
        self.x = x
        self.y = y


class HandleDestroyedError(SimulatorError):
    """Raised when invoking a callback handle after it was destroyed."""

    def __init__(self, handle_id: int):
        super().__init__(
            message=f"Callback handle {handle_id} has been destroyed",
            details={"handle_id": handle_id},
        )
        self.handle_id = handle_id


class CallbackFailure(SimulatorError):
    """Wraps an error raised inside a forever-loop body or button handler.

    These are caught at the task boundary and logged; they are never
    propagated to the scheduler loop or to the caller of press().
    """

    def __init__(self, handle_id: int, kind: str, cause: BaseException):
        message = f"{kind} callback {handle_id} failed: {cause!r}"
        super().__init__(
            message=message,
            details={"handle_id": handle_id, "kind": kind},
        )
        self.handle_id = handle_id
        self.kind = kind
        self.cause = cause


# Short names used by script-facing documentation
InvalidPin = InvalidPinError
OutOfRange = OutOfRangeError
