"""Explicit status and result of a pipeline run."""

from typing import Generic, Iterator, Optional, TypeVar

from conduit.errors import (
    ConfigurationError,
    FilterFailure,
    PipelineError,
    ProtocolViolation,
)

T = TypeVar("T")


class Outcome(Generic[T]):
    """Status and result of a single pipeline run.

    Every stepper reports through this type so success and failure are
    always explicit. A successful outcome may carry ``None`` as its value,
    which means the source had nothing more to give (or the sink returned
    nothing). A failure always carries a message.

    Outcomes unpack as ``(ok, payload)`` where the payload is the value on
    success and the message on failure, which is the same shape a callable
    filter returns.

    Attributes:
        ok: Whether the run succeeded
        value: The final value of a successful run
        error: The failure message of a failed run
        original_error: Exception raised by the failing filter, if any
        position: 1-based position of the failing filter, if any
        error_type: PipelineError subclass used when the failure is raised
    """

    def __init__(
        self,
        ok: bool,
        value: Optional[T] = None,
        error: Optional[str] = None,
        original_error: Optional[Exception] = None,
        position: Optional[int] = None,
        error_type: type = FilterFailure,
    ):
        self.ok = ok
        self.value = value
        self.error = error
        self.original_error = original_error
        self.position = position
        self.error_type = error_type

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(True, value=value)

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        original_error: Optional[Exception] = None,
        position: Optional[int] = None,
        error_type: type = FilterFailure,
    ) -> "Outcome[T]":
        return cls(
            False,
            error=message,
            original_error=original_error,
            position=position,
            error_type=error_type,
        )

    @classmethod
    def misconfigured(cls, message: str) -> "Outcome[T]":
        return cls.failure(message, error_type=ConfigurationError)

    @classmethod
    def violation(cls, message: str, position: int) -> "Outcome[T]":
        return cls.failure(message, position=position, error_type=ProtocolViolation)

    @property
    def payload(self):
        return self.value if self.ok else self.error

    def to_error(self) -> PipelineError:
        """Build the exception describing this failed outcome.

        Raises:
            ValueError: If the outcome is a success
        """
        if self.ok:
            raise ValueError("Cannot build an error from a successful outcome")
        return self.error_type(self.error, self.original_error, self.position)

    def __iter__(self) -> Iterator:
        yield self.ok
        yield self.payload

    def __repr__(self) -> str:
        if self.ok:
            return f"Outcome(ok=True, value={self.value!r})"
        return f"Outcome(ok=False, error={self.error!r}, position={self.position!r})"
