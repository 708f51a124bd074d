"""
Soniverse Errors - Domain-specific error types.

Error hierarchy:
    SoniverseError (base)
    ├── MalformedModelError
    ├── DimensionMismatchError
    ├── IndexOutOfRangeError
    └── BackendError

Argument-domain problems (non-positive lengths, z <= -1, negative
frequencies) are plain ValueError.
"""

from __future__ import annotations

from typing import Any


class SoniverseError(Exception):
    """Base error for all soniverse errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedModelError(SoniverseError):
    """
    Raised when a cosmology model cannot be integrated.

    Raised before any integration starts:
    - A density parameter is missing, NaN or not a number
    - The Hubble constant or reference speed is not positive
    - The expansion rate is not real somewhere on the sample grid
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"Malformed model: {message}", details)
        self.parameter = parameter


class DimensionMismatchError(SoniverseError):
    """
    Raised when declared cube dimensions disagree with delivered data.

    The load is rejected as a whole.
    """

    def __init__(
        self,
        what: str,
        expected: int,
        actual: int,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"Wrong number of {what} ({actual} != {expected})",
            details,
        )
        self.what = what
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(SoniverseError):
    """
    Raised when a data index falls outside the declared cube bounds.

    Fatal to the operation that computed it, never to the session.
    """

    def __init__(
        self,
        index: Any,
        bounds: Any,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"Index {index} outside bounds {bounds}", details)
        self.index = index
        self.bounds = bounds


class BackendError(SoniverseError):
    """
    A single voice slot's backend operation failed.

    Reported through VoiceManager.on_error; other slots keep playing.
    """

    def __init__(
        self,
        slot_id: int,
        operation: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"Backend {operation} failed on slot {slot_id}: {cause}",
            details,
        )
        self.slot_id = slot_id
        self.operation = operation
        self.cause = cause
