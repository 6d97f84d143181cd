# src/models/request_state.py

"""Externally visible state of one asynchronous fetch."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from src.api.errors import (
    CatalogError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    NotFoundError,
    ValidationError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure category a host can render distinct copy for."""

    NETWORK = "network"
    HTTP_STATUS = "http_status"
    NOT_FOUND = "not_found"
    DECODE = "decode"
    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


# Most specific class first: NotFoundError is an HttpStatusError.
_KIND_BY_ERROR: list[tuple[type[CatalogError], ErrorKind]] = [
    (NotFoundError, ErrorKind.NOT_FOUND),
    (HttpStatusError, ErrorKind.HTTP_STATUS),
    (NetworkError, ErrorKind.NETWORK),
    (DecodeError, ErrorKind.DECODE),
    (ValidationError, ErrorKind.VALIDATION),
]


@dataclass(frozen=True)
class ErrorInfo:
    """UI-safe description of a failure.

    ``message`` is meant for display; ``detail`` keeps the raw upstream
    text for diagnostics.
    """

    kind: ErrorKind
    message: str
    detail: str = ""
    status: int | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        """Normalize any exception into an ``ErrorInfo``."""
        status = exc.status if isinstance(exc, HttpStatusError) else None
        for error_cls, kind in _KIND_BY_ERROR:
            if isinstance(exc, error_cls):
                return cls(
                    kind=kind,
                    message=exc.user_message,
                    detail=str(exc),
                    status=status,
                )
        return cls(
            kind=ErrorKind.UNEXPECTED,
            message=CatalogError.user_message,
            detail=f"{type(exc).__name__}: {exc}",
        )

    @property
    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND


@dataclass(frozen=True)
class RequestState(Generic[T]):
    """Tri-state ``{data, is_loading, error}`` snapshot.

    Only three combinations are ever built, through the class
    constructors below: idle/loading, success, failure.
    """

    data: T | None = None
    is_loading: bool = False
    error: ErrorInfo | None = None

    @classmethod
    def idle(cls) -> "RequestState[T]":
        return cls()

    @classmethod
    def loading(cls) -> "RequestState[T]":
        return cls(is_loading=True)

    @classmethod
    def success(cls, data: T) -> "RequestState[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: ErrorInfo) -> "RequestState[T]":
        return cls(error=error)
