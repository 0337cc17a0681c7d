"""
Error types raised by the Account Health core.

Taxonomy:
- RepositoryUnavailableError: the agent store could not be read. Raised by
  repository implementations, wrapping the driver exception as __cause__.
  The aggregation and simulation services never retry or suppress it.
- InvalidIdentifierError and its subclasses: a caller passed an intervention
  id, segment axis, or segment value outside the fixed enumerations. Raised
  before any I/O so a bad identifier never produces zero-filled metrics.

An empty agent population is not an error; it yields all-zero metrics.

Each error carries a stable ``code`` used by the API layer to build the
``{"success": false, "error": {...}}`` envelope.
"""

from typing import Any, Dict, Optional, Sequence


class AccountHealthError(Exception):
    """Base class for all errors raised by the Account Health core."""

    code: str = "SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class RepositoryUnavailableError(AccountHealthError):
    """The agent repository failed to return a collection."""

    code = "REPOSITORY_UNAVAILABLE"


class InvalidIdentifierError(AccountHealthError, ValueError):
    """An identifier outside one of the fixed enumerations."""

    code = "INVALID_REQUEST"
    kind: str = "identifier"

    def __init__(self, value: str, allowed: Sequence[str]) -> None:
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid {self.kind}: {value!r}. Valid values: {self.allowed}",
            details={"field": self.kind, "value": value, "allowed": self.allowed},
        )


class UnknownInterventionError(InvalidIdentifierError):
    kind = "interventionType"


class UnknownSegmentTypeError(InvalidIdentifierError):
    kind = "segmentType"


class UnknownSegmentValueError(InvalidIdentifierError):
    """Segment value not in the value set of the given axis."""

    kind = "segmentValue"

    def __init__(self, segment_type: str, value: str, allowed: Sequence[str]) -> None:
        self.segment_type = segment_type
        super().__init__(value, allowed)
        self.message = (
            f"Invalid segmentValue {value!r} for segmentType {segment_type!r}. "
            f"Valid values: {self.allowed}"
        )
        self.args = (self.message,)
        self.details["segmentType"] = segment_type
