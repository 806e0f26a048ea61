"""pyocl — error model for the OpenCL binding.

Every fallible operation of the binding returns a ``Result`` holding either
the operation's value or an :class:`~pyocl.errors.OclError`.

Submodules
----------
status
    ``Status``: the ``cl_int`` status codes of OpenCL 1.2 and the common
    KHR/EXT extensions.

errors
    ``OclError`` (single tagged-union exception), ``ErrorKind``,
    ``StatusFailure``, the status translator ``translate`` /
    ``check_status`` and the ``fail`` / ``fail_conversion`` helpers.

result
    ``Ok`` / ``Err`` / ``Result`` and the ``into_result`` decorator.

convert
    Promotion of ``str``, ``UnicodeError``, ``NulError`` and ``OSError``
    into ``OclError``; C string helpers.

dims
    ``resolve_dims`` for work sizes and buffer shapes.

config
    ``ErrorConfig`` tuning knobs for the diagnostics.

Usage
-----
Command-line::

    python -m pyocl explain -5 clEnqueueReadBuffer --args "buffer_size=1024"
    python -m pyocl codes --failures-only

Programmatic::

    from pyocl import translate, Status

    result = translate(status, "clEnqueueReadBuffer", f"buffer_size={size}")
    if result.is_err and result.error.status() == Status.CL_OUT_OF_RESOURCES:
        ...

"""

from __future__ import annotations

from pyocl.config import DEFAULT_CONFIG, ErrorConfig
from pyocl.convert import NulError, from_c_string, promote, promote_errors, to_c_string
from pyocl.dims import resolve_dims
from pyocl.errors import (
    ErrorKind,
    FatalStatusError,
    OclError,
    StatusFailure,
    check_status,
    docs_url,
    fail,
    fail_conversion,
    translate,
)
from pyocl.result import Err, Ok, Result, into_result
from pyocl.status import Status

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "DEFAULT_CONFIG",
    "Err",
    "ErrorConfig",
    "ErrorKind",
    "FatalStatusError",
    "NulError",
    "OclError",
    "Ok",
    "Result",
    "Status",
    "StatusFailure",
    "check_status",
    "docs_url",
    "fail",
    "fail_conversion",
    "from_c_string",
    "into_result",
    "promote",
    "promote_errors",
    "resolve_dims",
    "to_c_string",
    "translate",
]
