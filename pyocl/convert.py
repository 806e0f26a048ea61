# pyocl/convert.py
"""
Promotion of foreign errors into :class:`~pyocl.errors.OclError`.

Each conversion wraps the foreign value unchanged, so the description of the
promoted error is exactly the description of the original.

============================  ==================
foreign error                 promoted kind
============================  ==================
``str``                       ``MESSAGE``
``UnicodeError``              ``INVALID_TEXT``
``NulError``                  ``INVALID_TEXT``
``OSError``                   ``IO``
``OclError``                  unchanged
============================  ==================

The C string helpers here are the usual producers of ``INVALID_TEXT``
failures: strings handed to OpenCL (kernel names, build options) must not
contain NUL, and strings read back (build logs, info queries) must be UTF-8.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Union

from pyocl.errors import NulError, OclError

__all__ = ["NulError", "Promotable", "from_c_string", "promote", "promote_errors", "to_c_string"]

Promotable = Union[OclError, str, UnicodeError, NulError, OSError]


def promote(err: Promotable) -> OclError:
    """
    Wrap *err* in the matching ``OclError`` kind.

    Raises ``TypeError`` for values that have no conversion.
    """
    if isinstance(err, OclError):
        return err
    if isinstance(err, str):
        return OclError.new(err)
    if isinstance(err, (UnicodeError, NulError)):
        return OclError.invalid_text(err)
    if isinstance(err, OSError):
        return OclError.io(err)
    raise TypeError(f"cannot convert {type(err).__name__} into OclError")


@contextmanager
def promote_errors() -> Iterator[None]:
    """
    Re-raise foreign errors escaping the block as ``OclError``.

    The original exception stays reachable through ``__cause__``.
    """
    try:
        yield
    except (UnicodeError, NulError, OSError) as exc:
        raise promote(exc) from exc


def to_c_string(text: str) -> bytes:
    """Encode *text* as NUL-terminated UTF-8."""
    data = text.encode("utf-8")
    position = data.find(b"\0")
    if position != -1:
        raise NulError(position, data)
    return data + b"\0"


def from_c_string(data: bytes) -> str:
    """Decode a C string, stopping at the first NUL if there is one."""
    end = data.find(b"\0")
    if end != -1:
        data = data[:end]
    return data.decode("utf-8")
