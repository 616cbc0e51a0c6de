"""src/valuewrap/types/string.py

Chainable string wrapper providing the trim, replace and case primitives used
by URL normalization.
"""

import re
from typing import Any, Optional, Union

from valuewrap.exceptions import ConversionError
from valuewrap.types.base import Type, read_stream
from valuewrap.types.scalar import Scalar

__all__ = ["String"]

_FALSE_STRINGS = ("off", "false", "no", "0", "zero")


class String(Scalar):
    """
    Mutable text wrapper. Mutators return ``self`` so calls can be chained::

        String("  Fish & Chips ").trim().simple_replace("&", "and").get()
    """

    __slots__ = ("current",)

    def _from_object(self, value: Any) -> bool:
        text = value.to_string() if isinstance(value, Scalar) else str(value)
        self.original = self.current = text
        return True

    def _from_bool(self, value: bool) -> bool:
        self.original = self.current = "true" if value else "false"
        return True

    def _from_int(self, value: int) -> bool:
        self.original = self.current = str(value)
        return True

    def _from_float(self, value: float) -> bool:
        self.original = self.current = str(value)
        return True

    def _from_string(self, value: str) -> bool:
        self.original = self.current = value
        return True

    def _from_stream(self, value: Any) -> bool:
        try:
            text = read_stream(value)
        except UnicodeDecodeError as exc:
            raise ConversionError("stream", type(self).__name__) from exc
        self.original = self.current = text
        return True

    def clear(self) -> "String":
        self.original = self.current = ""
        return self

    def get(self) -> str:
        return self.current

    def trim(self, chars: Optional[str] = None) -> "String":
        """Strip whitespace (or ``chars``) from both ends."""
        self.current = self.current.strip(chars)
        return self

    def left_trim(self, chars: Optional[str] = None) -> "String":
        self.current = self.current.lstrip(chars)
        return self

    def right_trim(self, chars: Optional[str] = None) -> "String":
        self.current = self.current.rstrip(chars)
        return self

    def replace(
        self, pattern: Union[str, "re.Pattern[str]"], replacement: str, count: int = 0
    ) -> "String":
        """
        Replace matches of a regular expression.

        Args:
            pattern: Regex pattern (string or compiled).
            replacement: Replacement text, may use group references.
            count: Maximum number of replacements, 0 for all.
        """
        self.current = re.sub(pattern, replacement, self.current, count=count)
        return self

    def simple_replace(self, search: str, replace: str) -> "String":
        """Replace every literal occurrence of ``search``."""
        self.current = self.current.replace(search, replace)
        return self

    def to_lower_case(self) -> "String":
        self.current = self.current.lower()
        return self

    def to_upper_case(self) -> "String":
        self.current = self.current.upper()
        return self

    def starts_with(self, needle: str) -> bool:
        return self.current.startswith(needle)

    def ends_with(self, needle: str) -> bool:
        return self.current.endswith(needle)

    def contains(self, needle: str, case_sensitive: bool = True) -> bool:
        if case_sensitive:
            return needle in self.current
        return needle.lower() in self.current.lower()

    def compare_to(self, other: Union[str, Type], case_sensitive: bool = True) -> bool:
        """Check whether this string equals ``other``."""
        other_text = other.to_string() if isinstance(other, Scalar) else str(other)
        if case_sensitive:
            return self.current == other_text
        return self.current.lower() == other_text.lower()

    def length(self) -> int:
        return len(self.current)

    def to_bool(self) -> bool:
        """
        Interpret the text as a flag.

        Empty text and "off", "false", "no", "0", "zero" (any case) are false.
        """
        return bool(self.current) and self.current.lower() not in _FALSE_STRINGS
