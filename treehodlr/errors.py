"""Error codes and exceptions raised by the HODLR routines."""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar


class ErrorCode(IntEnum):
    """Reason for a failure, in the order the routines report them."""

    SUCCESS = 0
    ALLOCATION_FAILURE = 1
    SVD_FAILURE = 2
    SVD_ALLOCATION_FAILURE = 3
    INPUT_ERROR = 4


class HodlrError(Exception):
    """Base class of every error raised by the package.

    Each instance carries an :class:`ErrorCode` in ``code``. Subclasses
    provide a default code; the base class needs one passed explicitly.
    """

    default_code: ClassVar[ErrorCode | None] = None

    def __init__(self, message: str = "", *, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        chosen = code if code is not None else self.default_code
        if chosen is None:
            raise TypeError(f"{type(self).__name__} needs an error code")
        chosen = ErrorCode(chosen)
        if chosen is ErrorCode.SUCCESS:
            raise ValueError("SUCCESS is not an error code")
        self.code: ErrorCode = chosen


class AllocationError(HodlrError):
    """Storage for the tree or its data could not be obtained."""

    default_code = ErrorCode.ALLOCATION_FAILURE


class SvdError(HodlrError):
    """The singular value decomposition failed.

    ``info`` holds the status reported by the decomposition routine.
    """

    default_code = ErrorCode.SVD_FAILURE

    def __init__(
        self,
        message: str = "",
        *,
        code: ErrorCode | None = None,
        info: int = 0,
    ) -> None:
        super().__init__(message, code=code)
        self.info = info


class InputError(HodlrError, ValueError):
    """An argument was missing, malformed or out of range."""

    default_code = ErrorCode.INPUT_ERROR