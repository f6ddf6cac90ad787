"""
Choice Engine - Custom Error Types
Structured exceptions raised at the engine's boundaries.

The normalization core never raises for input data; these errors belong to the
wire decoding layer and to configuration loading.
"""
from typing import Dict, Any, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the choice engine."""
    UNKNOWN = "UNKNOWN"
    INVALID_CHOICE_DATA = "INVALID_CHOICE_DATA"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ChoiceEngineError(Exception):
    """
    Base exception for all choice-engine errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Additional context details
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON response."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class InvalidChoiceDataError(ChoiceEngineError):
    """Raised when a wire payload cannot be decoded into a message."""

    def __init__(
        self,
        message: str = "Invalid choice data",
        errors: Optional[List[Dict[str, Any]]] = None,
        payload_type: Optional[str] = None,
    ):
        details: Dict[str, Any] = {}
        if payload_type:
            details["payload_type"] = payload_type
        if errors:
            details["errors"] = errors
        super().__init__(
            code=ErrorCode.INVALID_CHOICE_DATA,
            message=message,
            details=details,
        )


class ConfigurationError(ChoiceEngineError):
    """Raised when engine settings are malformed."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            details=details,
        )
