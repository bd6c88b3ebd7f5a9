"""Error types and policies used throughout conduit pipelines."""

from enum import Enum
from typing import Optional


class ErrorPolicy(Enum):
    """Error handling policies for pipeline execution."""

    FAIL_FAST = "fail_fast"  # Raise on the first failing filter
    IGNORE = "ignore"  # Swallow the failure, run() returns None


class PipelineError(Exception):
    """Exception raised when pipeline execution fails."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        position: Optional[int] = None,
    ):
        """Create a pipeline error with contextual metadata.

        Args:
            message: Human-readable description of the failure.
            original_error: The exception raised by a filter, if any.
            position: 1-based position of the filter that failed.

        """
        self.message = message
        self.original_error = original_error
        self.position = position
        super().__init__(message)


class ConfigurationError(PipelineError):
    """A pipeline was assembled or used in a way that can never run."""


class FilterFailure(PipelineError):
    """A filter reported failure, raised, or missed a table lookup."""


class ProtocolViolation(FilterFailure):
    """A filter in the middle of a chain returned no value."""


class UnknownFilterError(ConfigurationError, AttributeError):
    """A builder was asked for a filter its registry does not have."""
