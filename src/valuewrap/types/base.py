"""src/valuewrap/types/base.py

Polymorphic construction for wrapped values.

Every wrapper accepts one native input value. The value is classified into an
``InputKind`` and handed to the matching ``_from_*`` routine of the concrete
wrapper. Routines a wrapper does not override report "not handled", in which
case construction fails with ``ConversionError``.
"""

import enum
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Type as TypingType, TypeVar

from valuewrap.exceptions import ConversionError, ValueWrapError

__all__ = ["InputKind", "classify", "read_stream", "Type"]

logger = logging.getLogger(__name__)

_T = TypeVar("_T", bound="Type")

# Builtins that never count as OBJECT even though some define __str__.
_NATIVE_TYPES = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    memoryview,
    list,
    tuple,
    dict,
    set,
    frozenset,
)


class InputKind(enum.Enum):
    """Closed set of input cases understood by the dispatcher."""

    NULL = "null"
    OBJECT = "object"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    LIST = "list"
    STREAM = "stream"


def _is_object(value: Any) -> bool:
    if isinstance(value, Type):
        return True
    if isinstance(value, _NATIVE_TYPES):
        return False
    return type(value).__str__ is not object.__str__


def _is_stream(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return True
    return callable(getattr(value, "read", None))


def classify(value: Any) -> Optional[InputKind]:
    """
    Classify a native value into its input kind.

    Checks run in a fixed priority: object, boolean, integer, float, text,
    list, stream.

    Args:
        value: Any native value.

    Returns:
        The matching InputKind, or None if the value fits no case
        (e.g. a dict or a plain class without ``__str__``).
    """
    if value is None:
        return InputKind.NULL
    if _is_object(value):
        return InputKind.OBJECT
    if isinstance(value, bool):
        return InputKind.BOOLEAN
    if isinstance(value, int):
        return InputKind.INTEGER
    if isinstance(value, float):
        return InputKind.FLOAT
    if isinstance(value, str):
        return InputKind.TEXT
    if isinstance(value, (list, tuple)):
        return InputKind.LIST
    if _is_stream(value):
        return InputKind.STREAM
    return None


def read_stream(value: Any, encoding: str = "utf-8") -> str:
    """
    Read a byte buffer or file-like object fully into text.

    Raises:
        UnicodeDecodeError: If the content is not valid in ``encoding``.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
    else:
        data = value.read()
    if isinstance(data, str):
        return data
    return bytes(data).decode(encoding)


class Type(ABC):
    """
    Base class for all wrapped value types.

    Subclasses override the ``_from_*`` routines meaningful for them and
    implement ``get()`` and ``clear()``.
    """

    __slots__ = ()

    _HANDLERS = {
        InputKind.OBJECT: "_from_object",
        InputKind.BOOLEAN: "_from_bool",
        InputKind.INTEGER: "_from_int",
        InputKind.FLOAT: "_from_float",
        InputKind.TEXT: "_from_string",
        InputKind.LIST: "_from_list",
        InputKind.STREAM: "_from_stream",
    }

    def __init__(self, value: Any = None) -> None:
        self.set(value)

    @classmethod
    def create(cls: TypingType[_T], value: Any = None) -> _T:
        """Alternative constructor, handy for chaining."""
        return cls(value)

    def set(self: _T, value: Any) -> _T:
        """
        Adopt a new value, replacing whatever the wrapper held.

        The wrapper is always cleared first so no state from a previous
        value survives. If conversion fails the wrapper is left cleared.

        Args:
            value: Any native value; None resets to the empty value.

        Returns:
            self, for chaining.

        Raises:
            ConversionError: If the wrapper has no routine for the value's kind.
            ValueWrapError: Any subclass raised by the routine itself.
        """
        self.clear()
        kind = classify(value)
        if kind is InputKind.NULL:
            return self

        handled = False
        if kind is not None:
            try:
                handled = getattr(self, self._HANDLERS[kind])(value)
            except ValueWrapError:
                self.clear()
                raise

        if not handled:
            kind_name = kind.value if kind is not None else type(value).__name__
            logger.debug("No %s routine for %s", kind_name, type(self).__name__)
            self.clear()
            raise ConversionError(kind_name, type(self).__name__)

        logger.debug("Converted %s input to %s", kind.value, type(self).__name__)
        return self

    # pylint: disable=unused-argument
    def _from_object(self, value: Any) -> bool:
        return False

    def _from_bool(self, value: bool) -> bool:
        return False

    def _from_int(self, value: int) -> bool:
        return False

    def _from_float(self, value: float) -> bool:
        return False

    def _from_string(self, value: str) -> bool:
        return False

    def _from_list(self, value: Any) -> bool:
        return False

    def _from_stream(self, value: Any) -> bool:
        return False

    @abstractmethod
    def get(self) -> Any:
        """Return the native representation of the wrapped value."""

    @abstractmethod
    def clear(self) -> Any:
        """Reset to the type's empty value. Must be idempotent."""
