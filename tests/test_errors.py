# tests/test_errors.py
"""
Tests for the OclError taxonomy: construction, description dispatch,
rendering, the status() accessor and prepend().
"""

import copy
import pickle

import pytest

from pyocl.errors import (
    UNSPECIFIED_DIMENSIONS_DESC,
    ErrorKind,
    NulError,
    OclError,
    StatusFailure,
    fail,
    fail_conversion,
)
from pyocl.result import Err
from pyocl.status import Status


class TestConstruction:

    def test_one_error_per_kind(self, one_of_each):
        assert [e.kind for e in one_of_each] == list(ErrorKind)

    def test_payload_must_match_kind(self):
        with pytest.raises(TypeError, match="MESSAGE"):
            OclError(ErrorKind.MESSAGE, 42)

    def test_io_requires_oserror(self):
        with pytest.raises(TypeError):
            OclError(ErrorKind.IO, ValueError("nope"))

    def test_unspecified_dimensions_takes_no_payload(self):
        with pytest.raises(TypeError):
            OclError(ErrorKind.UNSPECIFIED_DIMENSIONS, "dims")

    def test_is_an_exception(self):
        with pytest.raises(OclError) as info:
            raise OclError.new("boom")
        assert info.value.kind is ErrorKind.MESSAGE

    def test_no_subclass_per_kind(self, one_of_each):
        assert {type(e) for e in one_of_each} == {OclError}

    def test_invalid_text_rejects_plain_value_error(self):
        with pytest.raises(TypeError, match="INVALID_TEXT"):
            OclError.invalid_text(ValueError("x"))

    def test_invalid_text_accepts_nul_error(self):
        nul = NulError(2, b"va\0dd")
        assert OclError.invalid_text(nul).underlying is nul

    @pytest.mark.parametrize("duplicate", [
        copy.copy,
        copy.deepcopy,
        lambda e: pickle.loads(pickle.dumps(e)),
    ], ids=["copy", "deepcopy", "pickle"])
    def test_duplicate_keeps_kind_and_payload(self, one_of_each, duplicate):
        errors = one_of_each + [OclError.invalid_text(NulError(2, b"va\0dd"))]
        for err in errors:
            dup = duplicate(err)
            assert dup is not err
            assert dup.kind is err.kind
            assert dup.description() == err.description()

    def test_pickle_keeps_status_failure(self, read_buffer_error):
        dup = pickle.loads(pickle.dumps(read_buffer_error))
        assert dup.failure == read_buffer_error.failure

    def test_pickle_keeps_nul_error_fields(self):
        err = OclError.invalid_text(NulError(2, b"va\0dd"))
        dup = pickle.loads(pickle.dumps(err))
        assert isinstance(dup.underlying, NulError)
        assert dup.underlying.position == 2
        assert dup.underlying.data == b"va\0dd"


class TestDescription:

    def test_text_kinds_verbatim(self):
        assert OclError.new("bad shape").description() == "bad shape"
        assert OclError.conversion("not a uchar").description() == "not a uchar"

    def test_status_failure_uses_rendered_description(self, read_buffer_error):
        assert read_buffer_error.description() == read_buffer_error.failure.description

    def test_invalid_text_delegates(self, decode_failure):
        err = OclError.invalid_text(decode_failure)
        assert err.description() == str(decode_failure)

    def test_io_delegates(self):
        io_err = PermissionError(13, "Permission denied", "/dev/dri/card0")
        assert OclError.io(io_err).description() == str(io_err)

    def test_unspecified_dimensions_sentence(self):
        err = OclError.unspecified_dimensions()
        assert err.description() == (
            "Cannot convert to a valid set of dimensions. "
            "Please specify some dimensions."
        )
        assert err.description() == UNSPECIFIED_DIMENSIONS_DESC

    def test_display_equals_description(self, one_of_each):
        for err in one_of_each:
            assert err.display() == err.description()
            assert str(err) == err.description()

    def test_args_mirror_description(self, one_of_each):
        for err in one_of_each:
            assert err.args == (err.description(),)


class TestAccessors:

    def test_status_on_failure(self, read_buffer_error):
        assert read_buffer_error.status() is Status.CL_OUT_OF_RESOURCES
        assert read_buffer_error.status() == -5

    def test_status_none_elsewhere(self, one_of_each):
        others = [e for e in one_of_each if e.kind is not ErrorKind.STATUS_FAILURE]
        assert len(others) == 5
        assert all(e.status() is None for e in others)

    def test_text(self):
        assert OclError.new("x").text == "x"
        assert OclError.unspecified_dimensions().text is None

    def test_underlying(self, decode_failure):
        assert OclError.invalid_text(decode_failure).underlying is decode_failure
        assert OclError.new("x").underlying is None

    def test_failure(self, read_buffer_error):
        failure = read_buffer_error.failure
        assert isinstance(failure, StatusFailure)
        assert failure.operation_name == "clEnqueueReadBuffer"
        assert failure.operation_args == "buffer_size=1024"
        assert OclError.new("x").failure is None

    def test_repr(self):
        assert repr(OclError.new("x")) == "OclError(MESSAGE, 'x')"
        assert repr(OclError.unspecified_dimensions()) == "OclError(UNSPECIFIED_DIMENSIONS)"


class TestPrepend:

    def test_prepend_message(self):
        err = OclError.new("bad shape")
        err.prepend("context: ")
        assert err.text == "context: bad shape"
        assert err.kind is ErrorKind.MESSAGE
        assert str(err) == "context: bad shape"
        assert err.args == ("context: bad shape",)

    def test_prepend_twice(self):
        err = OclError.new("c")
        err.prepend("b")
        err.prepend("a")
        assert err.text == "abc"

    def test_prepend_is_noop_elsewhere(self, one_of_each):
        for err in one_of_each:
            if err.kind is ErrorKind.MESSAGE:
                continue
            before = err.description()
            err.prepend("context: ")
            assert err.description() == before

    def test_prepend_on_conversion_is_noop(self):
        err = OclError.conversion("not a uchar")
        err.prepend("context: ")
        assert err.text == "not a uchar"


class TestHelpers:

    def test_fail(self):
        result = fail("bad shape")
        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.MESSAGE
        assert result.error.text == "bad shape"

    def test_fail_then_prepend(self):
        result = fail("bad shape")
        result.error.prepend("context: ")
        assert result.error.text == "context: bad shape"

    def test_fail_conversion(self):
        result = fail_conversion("not a uchar")
        assert result.is_err
        assert result.error.kind is ErrorKind.CONVERSION
        assert result.error.description() == "not a uchar"

    def test_helpers_return_fresh_errors(self):
        assert fail("x").error is not fail("x").error
