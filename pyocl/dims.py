# pyocl/dims.py
"""Work-size and buffer-shape resolution."""

from __future__ import annotations

from numbers import Integral
from typing import Any, Tuple

from pyocl.errors import OclError, fail_conversion
from pyocl.result import Err, Ok, Result

MAX_DIMS: int = 3


def resolve_dims(dims: Any) -> Result[Tuple[int, int, int]]:
    """
    Normalise *dims* to a three-dimensional size.

    ``None`` or an empty sequence means nothing was specified and gives an
    ``UNSPECIFIED_DIMENSIONS`` error. An integer or a sequence of one to three
    positive integers is padded with ``1`` up to three dimensions.
    """
    if dims is None:
        return Err(OclError.unspecified_dimensions())
    if isinstance(dims, Integral) and not isinstance(dims, bool):
        dims = (dims,)
    try:
        lens = tuple(dims)
    except TypeError:
        return fail_conversion(
            f"Cannot convert a {type(dims).__name__} into dimensions."
        )

    if not lens:
        return Err(OclError.unspecified_dimensions())
    if len(lens) > MAX_DIMS:
        return fail_conversion(
            f"Too many dimensions: {len(lens)} (at most {MAX_DIMS} are supported)."
        )
    for idx, length in enumerate(lens):
        if isinstance(length, bool) or not isinstance(length, Integral):
            return fail_conversion(
                f"Dimension {idx} must be an integer, got {type(length).__name__}."
            )
        if length <= 0:
            return fail_conversion(
                f"Dimension {idx} must be positive, got {length}."
            )

    padded = tuple(int(n) for n in lens) + (1,) * (MAX_DIMS - len(lens))
    return Ok(padded)
