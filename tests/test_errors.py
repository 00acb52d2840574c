"""Tests for the SproutError value."""
from sprout.errors import SproutError, is_error


def test_single_error():
    error = SproutError("404", "Not Found", {"path": "/x"})
    assert error.code == "404"
    assert error.message == "Not Found"
    assert error.data == {"path": "/x"}
    assert error.has_errors()


def test_empty_error():
    error = SproutError()
    assert error.code is None
    assert error.message == ""
    assert error.data is None
    assert not error.has_errors()


def test_multiple_codes_and_messages():
    error = SproutError("first", "one")
    error.add("first", "two")
    error.add("second", "three", 3)

    assert error.codes == ["first", "second"]
    assert error.get_messages("first") == ["one", "two"]
    assert error.get_messages() == ["one", "two", "three"]
    assert error.get_messages("missing") == []
    assert error.data is None
    assert error.error_data["second"] == 3


def test_is_error():
    assert is_error(SproutError("x", "y"))
    assert not is_error(None)
    assert not is_error({"code": "x"})
