"""
Shared error handling for the fact matching engine.

Evaluation never raises: a query that satisfies nothing yields an empty
result. These errors cover rule construction and serialization only.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class MatchingException(Exception):
    """Base exception for the fact matching engine."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class RuleDefinitionError(MatchingException):
    """Invalid rule construction input."""

    def __init__(self, message: str = "Invalid rule definition", details: Optional[Dict[str, Any]] = None):
        super().__init__("RULE_DEFINITION_ERROR", message, details)


class SerializationError(MatchingException):
    """Rule or ruleset could not be converted to or from its serialized form."""

    def __init__(self, message: str = "Serialization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("SERIALIZATION_ERROR", message, details)
