# tests/conftest.py
"""Shared fixtures for the pyocl test-suite."""

import os
import sys

import pytest

# Ensure pyocl package is importable without an install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pyocl.errors import OclError, translate


def _decode_failure() -> UnicodeDecodeError:
    try:
        b"\xff\xfe".decode("utf-8")
    except UnicodeDecodeError as exc:
        return exc
    raise AssertionError("expected a decode failure")


@pytest.fixture
def decode_failure():
    return _decode_failure()


@pytest.fixture
def read_buffer_error():
    """The STATUS_FAILURE error of a failed clEnqueueReadBuffer call."""
    return translate(-5, "clEnqueueReadBuffer", "buffer_size=1024").error


@pytest.fixture
def one_of_each(read_buffer_error, decode_failure):
    """One error per kind."""
    return [
        OclError.conversion("cannot convert a float4 into a uchar"),
        read_buffer_error,
        OclError.new("bad shape"),
        OclError.invalid_text(decode_failure),
        OclError.io(FileNotFoundError(2, "No such file or directory", "kernel.cl")),
        OclError.unspecified_dimensions(),
    ]
