"""tests/unit/test_base.py"""

import io
import logging
from pathlib import PurePosixPath

import pytest

from valuewrap.exceptions import ConversionError, ParseError
from valuewrap.types.base import InputKind, Type, classify, read_stream
from valuewrap.types.scalar import Scalar
from valuewrap.types.string import String


class Opaque:
    """A class with no text form."""


class Number(Scalar):
    """Wrapper that only understands objects, booleans, numbers and text."""

    __slots__ = ("current",)

    def _from_object(self, value):
        return self._from_string(str(value))

    def _from_bool(self, value):
        self.original = self.current = int(value)
        return True

    def _from_int(self, value):
        self.original = self.current = value
        return True

    def _from_float(self, value):
        self.original = self.current = value
        return True

    def _from_string(self, value):
        try:
            number = float(value)
        except ValueError:
            return False
        self.original = self.current = number
        return True

    def clear(self):
        self.original = self.current = 0
        return self

    def get(self):
        return self.current


class Picky(Scalar):
    """Wrapper whose text routine fails half way through."""

    __slots__ = ("current",)

    def _from_string(self, value):
        self.original = self.current = value
        raise ParseError("cannot use this text")

    def clear(self):
        self.original = self.current = ""
        return self

    def get(self):
        return self.current


class TestClassify:
    """Tests for classify function."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, InputKind.NULL),
            (String("x"), InputKind.OBJECT),
            (PurePosixPath("/a/b"), InputKind.OBJECT),
            (True, InputKind.BOOLEAN),
            (False, InputKind.BOOLEAN),
            (0, InputKind.INTEGER),
            (1.5, InputKind.FLOAT),
            ("text", InputKind.TEXT),
            ("", InputKind.TEXT),
            ([1, 2], InputKind.LIST),
            ((1, 2), InputKind.LIST),
            (b"bytes", InputKind.STREAM),
            (bytearray(b"bytes"), InputKind.STREAM),
            (io.BytesIO(b"bytes"), InputKind.STREAM),
        ],
    )
    def test_classify_known_kinds(self, value, expected):
        """Test each supported input lands in exactly its kind."""
        assert classify(value) is expected

    @pytest.mark.parametrize("value", [{"a": 1}, {1, 2}, Opaque()])
    def test_classify_unknown(self, value):
        """Test composites without a text form are not classified."""
        assert classify(value) is None


class TestReadStream:
    """Tests for read_stream function."""

    def test_read_bytes(self):
        """Test byte buffers are decoded as UTF-8."""
        assert read_stream("café".encode("utf-8")) == "café"

    def test_read_binary_file(self):
        """Test binary file objects are read fully."""
        assert read_stream(io.BytesIO(b"http://example.com")) == "http://example.com"

    def test_read_text_file(self):
        """Test text file objects are returned as-is."""
        assert read_stream(io.StringIO("plain")) == "plain"

    def test_read_invalid_utf8(self):
        """Test invalid bytes raise UnicodeDecodeError."""
        with pytest.raises(UnicodeDecodeError):
            read_stream(b"\xff\xfe")


class TestType:
    """Tests for Type dispatch."""

    def test_type_is_abstract(self):
        """Test the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            Type()  # pylint: disable=abstract-class-instantiated

    def test_construct_from_none_is_empty(self):
        """Test None builds the empty value."""
        number = Number()
        assert number.get() == 0
        assert number.original == 0

    @pytest.mark.parametrize(
        "value, expected",
        [(7, 7), (2.5, 2.5), (True, 1), ("3.5", 3.5), (String("4"), 4.0)],
    )
    def test_dispatch_to_routine(self, value, expected):
        """Test each kind reaches its own routine."""
        assert Number(value).get() == expected

    def test_create_returns_subclass_instance(self):
        """Test create() builds an instance of the calling class."""
        number = Number.create(3)
        assert isinstance(number, Number)
        assert number.get() == 3

    def test_set_returns_self(self):
        """Test set() is chainable."""
        number = Number(1)
        assert number.set(2) is number
        assert number.get() == 2
        assert number.original == 2

    def test_set_none_clears(self):
        """Test set(None) resets to the empty value."""
        number = Number(9)
        number.set(None)
        assert number.get() == 0

    def test_unhandled_kind_raises(self):
        """Test a byte stream is rejected by a wrapper without a stream routine."""
        with pytest.raises(ConversionError) as exc_info:
            Number(b"123")
        assert exc_info.value.kind == "stream"
        assert exc_info.value.target == "Number"

    def test_unclassified_value_raises_with_type_name(self):
        """Test unclassifiable values report their Python type name."""
        with pytest.raises(ConversionError) as exc_info:
            Number({"a": 1})
        assert exc_info.value.kind == "dict"

    def test_routine_reporting_not_handled_raises(self):
        """Test a routine returning False is a conversion failure."""
        with pytest.raises(ConversionError) as exc_info:
            Number("not a number")
        assert exc_info.value.kind == "text"

    def test_failed_reassignment_leaves_cleared_value(self):
        """Test a rejected value never leaves stale or partial state."""
        number = Number(5)
        with pytest.raises(ConversionError):
            number.set([1, 2])
        assert number.get() == 0
        assert number.original == 0

    def test_routine_error_clears_partial_state(self):
        """Test errors raised inside a routine leave the wrapper cleared."""
        picky = Picky()
        with pytest.raises(ParseError):
            picky.set("half")
        assert picky.get() == ""
        assert picky.original == ""

    def test_dispatch_is_logged(self, caplog):
        """Test conversions are logged at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="valuewrap.types.base"):
            Number(5)
        assert "Converted integer input to Number" in caplog.text

    def test_repr_and_str(self):
        """Test explicit and implicit text forms agree."""
        number = Number(5)
        assert number.to_string() == "5"
        assert str(number) == "5"
        assert repr(number) == "Number('5')"
        assert number.to_list() == [5]
        assert number.to_bool() is True

    @pytest.mark.parametrize(
        "value, expected_int, expected_float",
        [(7, 7, 7.0), (2.9, 2, 2.9), ("3.5", 3, 3.5), (True, 1, 1.0)],
    )
    def test_numeric_conversions(self, value, expected_int, expected_float):
        """Test integer and float conversions of the wrapped value."""
        number = Number(value)
        assert number.to_int() == expected_int
        assert number.to_float() == expected_float

    @pytest.mark.parametrize(
        "text, expected_int, expected_float",
        [(" 42 ", 42, 42.0), ("2.5", 2, 2.5), ("-7", -7, -7.0)],
    )
    def test_numeric_conversions_from_text(self, text, expected_int, expected_float):
        """Test text is read as a number."""
        assert String(text).to_int() == expected_int
        assert String(text).to_float() == expected_float

    @pytest.mark.parametrize("text", ["abc", "", "http://example.com"])
    def test_non_numeric_text_raises(self, text):
        """Test text that is not a number cannot be converted."""
        with pytest.raises(ValueError):
            String(text).to_int()
        with pytest.raises(ValueError):
            String(text).to_float()

    def test_out_of_range_raises(self):
        """Test infinite values are out of range."""
        with pytest.raises(OverflowError):
            Number(float("inf")).to_int()
        with pytest.raises(OverflowError):
            Number(float("inf")).to_float()
        with pytest.raises(OverflowError):
            String("1e400").to_float()
        with pytest.raises(OverflowError):
            String("1e400").to_int()

    def test_nan_to_int_raises(self):
        """Test NaN has no integer value."""
        with pytest.raises(ValueError):
            Number(float("nan")).to_int()
