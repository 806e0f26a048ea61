# pyocl/errors.py
"""
pyocl Error Model

One exception type, :class:`OclError`, carries every recoverable failure the
binding can produce. It is a tagged union rather than a class hierarchy: the
active variant is named by :attr:`OclError.kind` and the payload is stored
alongside it.

Architecture Overview:
──────────────────────
┌─────────────────────────────────────────────────────────────────────────────┐
│  ErrorKind              payload                    description()            │
├─────────────────────────────────────────────────────────────────────────────┤
│  CONVERSION             str                        text verbatim            │
│  STATUS_FAILURE         StatusFailure              pre-rendered diagnostic  │
│  MESSAGE                str                        text verbatim            │
│  INVALID_TEXT           UnicodeError / NulError    str(underlying)          │
│  IO                     OSError                    str(underlying)          │
│  UNSPECIFIED_DIMENSIONS -                          fixed sentence           │
└─────────────────────────────────────────────────────────────────────────────┘

Status codes:
─────────────
:func:`translate` turns a raw ``cl_int`` into ``Ok(default)`` for
``CL_SUCCESS`` or ``Err(OclError)`` for every other known code. A code that
is not part of :class:`~pyocl.status.Status` means the loaded OpenCL library
does not match this binding; it raises :class:`FatalStatusError`, which is
deliberately outside the taxonomy.

Example Usage:
──────────────
    from pyocl.errors import translate, check_status

    result = translate(-5, "clEnqueueReadBuffer", "buffer_size=1024")
    if result.is_err:
        print(result.error)          # full diagnostic banner

    check_status(status, "clFinish") # raises OclError on failure
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, Union

from pyocl.config import DEFAULT_CONFIG, ErrorConfig
from pyocl.result import Err, Ok, Result
from pyocl.status import Status

_log = logging.getLogger(__name__)

T = TypeVar("T")

UNSPECIFIED_DIMENSIONS_DESC: str = (
    "Cannot convert to a valid set of dimensions. "
    "Please specify some dimensions."
)


# ═══════════════════════════════════════════════════════════════════════════════
# TAXONOMY
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorKind(Enum):
    """
    The closed set of failure sources.

    ``MESSAGE`` is the catch-all for locally raised errors and may shrink as
    more specific kinds are added. Do not rely on a failure staying a
    ``MESSAGE``.
    """

    CONVERSION = "conversion"
    STATUS_FAILURE = "status_failure"
    MESSAGE = "message"
    INVALID_TEXT = "invalid_text"
    IO = "io"
    UNSPECIFIED_DIMENSIONS = "unspecified_dimensions"


@dataclass(frozen=True)
class StatusFailure:
    """Payload of a ``STATUS_FAILURE`` error."""

    code: Status
    code_name: str
    operation_name: str
    operation_args: str
    description: str


class NulError(ValueError):
    """A string meant for C contained an interior NUL byte."""

    def __init__(self, position: int, data: bytes) -> None:
        self.position = position
        self.data = data
        super().__init__(
            f"nul byte found in provided data at position: {position}"
        )

    def __reduce__(self) -> Tuple[Any, ...]:
        return (type(self), (self.position, self.data))


_PAYLOAD_TYPES: Dict[ErrorKind, Union[Type[Any], Tuple[Type[Any], ...]]] = {
    ErrorKind.CONVERSION: str,
    ErrorKind.STATUS_FAILURE: StatusFailure,
    ErrorKind.MESSAGE: str,
    ErrorKind.INVALID_TEXT: (UnicodeError, NulError),
    ErrorKind.IO: OSError,
    ErrorKind.UNSPECIFIED_DIMENSIONS: type(None),
}


class FatalStatusError(BaseException):
    """
    A native call returned a status outside the known enumeration.

    This signals a mismatch between the binding and the loaded OpenCL
    library, not a runtime condition. It derives from ``BaseException`` so
    ``except Exception`` recovery paths let it through.
    """

    def __init__(self, code: int, operation_name: str) -> None:
        self.code = code
        self.operation_name = operation_name
        super().__init__(
            f"pyocl.errors.translate(): Invalid error code: '{code}' "
            f"returned by {operation_name}. Aborting."
        )


class OclError(Exception):
    """
    The single error type of the binding.

    Build instances through the classmethod constructors; the active variant
    is available as :attr:`kind`.
    """

    def __init__(self, kind: ErrorKind, payload: Any = None) -> None:
        expected = _PAYLOAD_TYPES[kind]
        if not isinstance(payload, expected):
            raise TypeError(
                f"{kind.name} error cannot carry a {type(payload).__name__} payload"
            )
        self._kind = kind
        self._payload = payload
        super().__init__(self.description())

    # ── constructors ───────────────────────────────────────────────────────

    @classmethod
    def new(cls, text: str) -> "OclError":
        """A generic ``MESSAGE`` error."""
        return cls(ErrorKind.MESSAGE, text)

    @classmethod
    def conversion(cls, text: str) -> "OclError":
        return cls(ErrorKind.CONVERSION, text)

    @classmethod
    def from_status(cls, failure: StatusFailure) -> "OclError":
        return cls(ErrorKind.STATUS_FAILURE, failure)

    @classmethod
    def invalid_text(cls, err: Union[UnicodeError, NulError]) -> "OclError":
        return cls(ErrorKind.INVALID_TEXT, err)

    @classmethod
    def io(cls, err: OSError) -> "OclError":
        return cls(ErrorKind.IO, err)

    @classmethod
    def unspecified_dimensions(cls) -> "OclError":
        return cls(ErrorKind.UNSPECIFIED_DIMENSIONS)

    # ── accessors ──────────────────────────────────────────────────────────

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def text(self) -> Optional[str]:
        """The carried text of a ``CONVERSION`` or ``MESSAGE`` error."""
        if self._kind in (ErrorKind.CONVERSION, ErrorKind.MESSAGE):
            return self._payload
        return None

    @property
    def failure(self) -> Optional[StatusFailure]:
        if self._kind is ErrorKind.STATUS_FAILURE:
            return self._payload
        return None

    @property
    def underlying(self) -> Optional[BaseException]:
        """The wrapped foreign exception of an ``INVALID_TEXT`` or ``IO`` error."""
        if self._kind in (ErrorKind.INVALID_TEXT, ErrorKind.IO):
            return self._payload
        return None

    def status(self) -> Optional[Status]:
        """Return the status code for ``STATUS_FAILURE`` errors, else ``None``."""
        if self._kind is ErrorKind.STATUS_FAILURE:
            return self._payload.code
        return None

    def description(self) -> str:
        kind = self._kind
        if kind is ErrorKind.CONVERSION or kind is ErrorKind.MESSAGE:
            return self._payload
        if kind is ErrorKind.STATUS_FAILURE:
            return self._payload.description
        if kind is ErrorKind.INVALID_TEXT or kind is ErrorKind.IO:
            return str(self._payload)
        if kind is ErrorKind.UNSPECIFIED_DIMENSIONS:
            return UNSPECIFIED_DIMENSIONS_DESC
        raise AssertionError(f"unhandled error kind: {kind!r}")

    def display(self) -> str:
        return self.description()

    # ── mutation ───────────────────────────────────────────────────────────

    def prepend(self, text: str) -> None:
        """
        If this is a ``MESSAGE`` error, put *text* in front of the contained
        string. Otherwise do nothing at all.
        """
        if self._kind is ErrorKind.MESSAGE:
            self._payload = text + self._payload
            self.args = (self._payload,)

    def __str__(self) -> str:
        return self.description()

    def __reduce__(self) -> Tuple[Any, ...]:
        return (type(self), (self._kind, self._payload))

    def __repr__(self) -> str:
        if self._payload is None:
            return f"OclError({self._kind.name})"
        return f"OclError({self._kind.name}, {self._payload!r})"


# ═══════════════════════════════════════════════════════════════════════════════
# STATUS TRANSLATION
# ═══════════════════════════════════════════════════════════════════════════════

def docs_url(operation_name: str, config: Optional[ErrorConfig] = None) -> str:
    """Reference-page URL describing the errors *operation_name* can return."""
    return (config or DEFAULT_CONFIG).docs_url(operation_name)


def fmt_status_desc(
    status: Status,
    operation_name: str,
    operation_args: str,
    config: Optional[ErrorConfig] = None,
) -> str:
    """Render the diagnostic banner stored in a ``STATUS_FAILURE`` error."""
    args_part = f'("{operation_args}")' if operation_args else ""
    return (
        "\n\n"
        "################################ OPENCL ERROR ############################### "
        f"\n\nError executing function: {operation_name}{args_part}  "
        f"\n\nStatus error code: {status.name} ({int(status)})  "
        "\n\nPlease visit the following url for more information: "
        f"\n\n{docs_url(operation_name, config)}  \n\n"
        "############################################################################# \n"
    )


def translate(
    code: int,
    operation_name: str,
    operation_args: Any = "",
    default_factory: Optional[Callable[[], T]] = None,
    *,
    config: Optional[ErrorConfig] = None,
) -> Result[T]:
    """
    Turn the raw status *code* returned by *operation_name* into a result.

    ``CL_SUCCESS`` yields ``Ok(default_factory())`` (``Ok(None)`` without a
    factory). Every other known code yields ``Err`` holding a
    ``STATUS_FAILURE`` error whose description is fully rendered here.

    Raises
    ------
    FatalStatusError
        *code* is not a known OpenCL status.
    """
    status = Status.from_code(code)
    if status is None:
        _log.critical(
            "Invalid error code %r returned by %s; the OpenCL library does not "
            "match this binding", code, operation_name,
        )
        raise FatalStatusError(code, operation_name)

    if status.is_success:
        return Ok(default_factory() if default_factory is not None else None)

    cfg = config or DEFAULT_CONFIG
    args = operation_args if isinstance(operation_args, str) else str(operation_args)
    failure = StatusFailure(
        code=status,
        code_name=status.name,
        operation_name=operation_name,
        operation_args=args,
        description=fmt_status_desc(status, operation_name, args, cfg),
    )
    if cfg.log_failures:
        _log.debug("%s failed with %s (%d)", operation_name, status.name, int(status))
    return Err(OclError.from_status(failure))


def check_status(
    code: int,
    operation_name: str,
    operation_args: Any = "",
    *,
    config: Optional[ErrorConfig] = None,
) -> None:
    """Like :func:`translate` but raises the ``OclError`` instead of returning it."""
    translate(code, operation_name, operation_args, config=config).unwrap()


# ═══════════════════════════════════════════════════════════════════════════════
# CONVENIENCE CONSTRUCTORS
# ═══════════════════════════════════════════════════════════════════════════════

def fail(text: str) -> Err:
    """Return an ``Err`` holding a ``MESSAGE`` error."""
    return Err(OclError.new(text))


def fail_conversion(text: str) -> Err:
    """Return an ``Err`` holding a ``CONVERSION`` error."""
    return Err(OclError.conversion(text))
