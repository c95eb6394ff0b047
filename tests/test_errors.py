import pytest

from auctionhouse.errors import (
    Cause,
    InternalError,
    RestError,
    bad_request_error,
    convert_error,
    internal_server_error,
    not_found_error,
    rest_bad_request,
    rest_internal_server,
    rest_not_found,
)


@pytest.mark.parametrize(
    "factory, kind",
    [
        (not_found_error, "not_found"),
        (internal_server_error, "internal_server_error"),
        (bad_request_error, "bad_request"),
    ],
)
def test_internal_error_factories(factory, kind):
    err = factory("something broke")
    assert err.err == kind
    assert err.message == "something broke"
    assert str(err) == "something broke"


def test_internal_error_is_raisable():
    err = bad_request_error("bad input")
    assert err.err == "bad_request"
    with pytest.raises(InternalError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "bad input"


def test_rest_bad_request_without_causes():
    err = rest_bad_request("Error trying to convert fields")
    assert err.code == 400
    assert err.err == "bad_request"
    assert err.causes is None
    assert err.to_dict()["causes"] is None


def test_rest_bad_request_with_causes():
    cause = Cause(field="auctionId", message="Invalid UUID value")
    err = rest_bad_request("Invalid fields", cause)
    assert err.causes == [cause]
    assert err.to_dict() == {
        "message": "Invalid fields",
        "err": "bad_request",
        "code": 400,
        "causes": [{"field": "auctionId", "message": "Invalid UUID value"}],
    }


def test_rest_internal_server_and_not_found():
    internal = rest_internal_server("oops")
    assert (internal.err, internal.code) == ("internal_server", 500)
    missing = rest_not_found("gone")
    assert (missing.err, missing.code) == ("not_found", 404)
    assert str(missing) == "gone"


def test_rest_error_is_exception():
    err = rest_not_found("gone")
    assert err.code == 404
    with pytest.raises(RestError) as info:
        raise err
    assert info.value is err
    assert info.value.to_dict()["message"] == "gone"


@pytest.mark.parametrize(
    "source, err, code",
    [
        (bad_request_error("x"), "bad_request", 400),
        (not_found_error("x"), "not_found", 404),
        (internal_server_error("x"), "internal_server", 500),
        (InternalError("x", "anything_else"), "internal_server", 500),
    ],
)
def test_convert_error(source, err, code):
    converted = convert_error(source)
    assert converted.err == err
    assert converted.code == code
    assert converted.message == source.message