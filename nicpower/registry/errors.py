# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/registry/errors.py
"""
Error and result types returned by registry operations.

Registry operations never raise for OS failures. They return a `Result`
holding either a value or a `RegError` with the OS status code and a message
naming the operation and the value/subkey involved.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from ..core.exceptions import RegistryError

# Win32 status codes (winerror.h) used by the registry layer.
ERROR_SUCCESS = 0
ERROR_FILE_NOT_FOUND = 2
ERROR_ACCESS_DENIED = 5
ERROR_INVALID_HANDLE = 6
ERROR_GEN_FAILURE = 31
ERROR_NOT_SUPPORTED = 50
ERROR_INVALID_PARAMETER = 87
ERROR_MORE_DATA = 234
ERROR_NO_MORE_ITEMS = 259
ERROR_UNSUPPORTED_TYPE = 1630

T = TypeVar("T")


def os_status(exc: OSError) -> int:
    """Win32 status of an OSError raised by winreg (errno on other platforms)."""
    code = getattr(exc, "winerror", None)
    if code is None:
        code = exc.errno
    return int(code) if code is not None else ERROR_GEN_FAILURE


def os_detail(code: int, text: Optional[str] = None) -> str:
    text = (text or "").strip()
    return f"[{code}] {text}" if text else f"[{code}] Some error occurred"


@dataclass(frozen=True)
class RegError:
    """
    Status of a registry operation.

    A default-constructed RegError means "no error".
    """
    code: int = ERROR_SUCCESS
    message: str = ""
    detail: str = ""
    cause: Optional["RegError"] = None

    @classmethod
    def from_os_error(cls, exc: OSError, message: str) -> "RegError":
        code = os_status(exc)
        return cls(code=code, message=message, detail=os_detail(code, exc.strerror))

    @classmethod
    def status(cls, code: int, message: str) -> "RegError":
        return cls(code=code, message=message, detail=os_detail(code))

    @property
    def failed(self) -> bool:
        return self.code != ERROR_SUCCESS

    def wrap(self, prefix: str) -> "RegError":
        """Contextualize this error; the code is kept and this error becomes the cause."""
        return RegError(code=self.code, message=f"{prefix}: {self.message}", detail=self.detail, cause=self)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            d["cause"] = self.cause.to_dict()
        return d

    def __str__(self) -> str:
        return f"{self.message} (error code: {self.code})"


NO_ERROR = RegError()


class Result(Generic[T]):
    """
    Either a value or a RegError, never both.

        res = key.read_u32("IdlePowerState")
        if res.ok:
            use(res.value)
        else:
            log(res.error)
    """

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[RegError] = None):
        if error is not None and not error.failed:
            raise ValueError("Result error must carry a failure status")
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":  # type: ignore[assignment]
        return cls(value=value)

    @classmethod
    def failure(cls, error: RegError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self._error is None

    @property
    def error(self) -> RegError:
        """The failure, or the "no error" RegError on success."""
        return self._error if self._error is not None else NO_ERROR

    @property
    def value(self) -> T:
        if self._error is not None:
            raise self._as_exception()
        return self._value  # type: ignore[return-value]

    def value_or(self, default: T) -> T:
        return default if self._error is not None else self._value  # type: ignore[return-value]

    def unwrap(self) -> T:
        return self.value

    def _as_exception(self) -> RegistryError:
        err = self.error
        return RegistryError(code=1, msg=str(err), context={"status": err.code, "detail": err.detail})

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Result.failure({self._error!r})"
        return f"Result.success({self._value!r})"
