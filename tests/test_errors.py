import pytest

from treehodlr.errors import (
    AllocationError,
    ErrorCode,
    HodlrError,
    InputError,
    SvdError,
)


@pytest.mark.parametrize(
    "cls, code",
    [
        (AllocationError, ErrorCode.ALLOCATION_FAILURE),
        (SvdError, ErrorCode.SVD_FAILURE),
        (InputError, ErrorCode.INPUT_ERROR),
    ],
)
def test_default_codes(cls, code):
    err = cls("boom")
    assert err.code is code
    assert str(err) == "boom"


def test_error_codes_follow_declaration_order():
    assert [c.name for c in sorted(ErrorCode)] == [
        "SUCCESS",
        "ALLOCATION_FAILURE",
        "SVD_FAILURE",
        "SVD_ALLOCATION_FAILURE",
        "INPUT_ERROR",
    ]
    assert ErrorCode(0) is ErrorCode.SUCCESS


def test_subclasses_are_caught_as_base():
    err = AllocationError("no memory")
    assert isinstance(err, HodlrError)
    assert err.code is ErrorCode.ALLOCATION_FAILURE
    assert str(err) == "no memory"


def test_input_error_is_value_error():
    err = InputError("bad height")
    assert isinstance(err, ValueError)
    assert err.code is ErrorCode.INPUT_ERROR
    assert str(err) == "bad height"


def test_svd_error_carries_info_and_custom_code():
    err = SvdError("work", code=ErrorCode.SVD_ALLOCATION_FAILURE, info=-4)
    assert err.code is ErrorCode.SVD_ALLOCATION_FAILURE
    assert err.info == -4


def test_svd_error_default_info():
    assert SvdError().info == 0


def test_base_error_requires_code():
    with pytest.raises(TypeError):
        HodlrError("no code")


def test_base_error_with_explicit_code():
    err = HodlrError("x", code=ErrorCode.SVD_FAILURE)
    assert err.code is ErrorCode.SVD_FAILURE


def test_integer_code_is_converted():
    err = HodlrError("x", code=1)
    assert err.code is ErrorCode.ALLOCATION_FAILURE


def test_success_is_rejected():
    with pytest.raises(ValueError):
        HodlrError("x", code=ErrorCode.SUCCESS)