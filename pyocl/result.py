# pyocl/result.py
"""
Result type for fallible binding operations.

Every fallible operation returns ``Result[T]``: either ``Ok(value)`` or
``Err(error)`` where ``error`` is always a :class:`pyocl.errors.OclError`.
Callers branch with ``is_ok`` / ``is_err`` or ``isinstance``:

    result = translate(status, "clFinish")
    if isinstance(result, Err):
        if result.error.status() == Status.CL_OUT_OF_RESOURCES:
            ...  # retry
        raise result.error
    value = result.value

or simply propagate with ``result.unwrap()``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, Union

if TYPE_CHECKING:
    from pyocl.errors import OclError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[["OclError"], Any]) -> "Ok[T]":
        return self


@dataclass(frozen=True)
class Err:
    error: "OclError"

    def __post_init__(self) -> None:
        from pyocl.convert import promote

        # Foreign errors (str, OSError, UnicodeError, ...) are wrapped here
        object.__setattr__(self, "error", promote(self.error))

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise self.error

    def unwrap_or(self, default: U) -> U:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self

    def map_err(self, fn: Callable[["OclError"], Any]) -> "Err":
        return Err(fn(self.error))


Result = Union[Ok[T], Err]


def into_result(func: Callable[..., T]) -> Callable[..., Result[T]]:
    """
    Decorator turning a raising function into one returning ``Result``.

    Foreign errors the conversion layer understands are promoted first, so
    an ``OSError`` raised inside *func* comes back as ``Err`` holding an
    ``IO`` error. Anything else propagates unchanged.
    """
    from pyocl.convert import promote_errors
    from pyocl.errors import OclError

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Result[T]:
        try:
            with promote_errors():
                return Ok(func(*args, **kwargs))
        except OclError as err:
            return Err(err)

    return wrapper
