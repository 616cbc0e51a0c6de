"""src/valuewrap/types/scalar.py

Scalar wrappers holding an original and a current value.
"""

import math
from typing import Any, List

from valuewrap.types.base import Type

__all__ = ["Scalar"]


class Scalar(Type):
    """
    A wrapper around one native value.

    Attributes:
        original: The input as first normalized. Never changed after (re)construction.
        current: The working value, mutated by subsequent operations. Stored
            by text wrappers, computed from structured state by Url.
    """

    __slots__ = ("original",)

    def to_string(self) -> str:
        """Explicit text form of the wrapped value."""
        return str(self.get())

    def to_bool(self) -> bool:
        return bool(self.get())

    def to_int(self) -> int:
        """
        Convert the wrapped value to an integer.

        Text is read as an integer literal, or as a float truncated toward zero.

        Raises:
            ValueError: If the value is not numeric (or is NaN).
            OverflowError: If the value is infinite.
        """
        value = self.get()
        if isinstance(value, str):
            value = value.strip()
            try:
                return int(value)
            except ValueError:
                value = float(value)
        return int(value)

    def to_float(self) -> float:
        """
        Convert the wrapped value to a float.

        Raises:
            ValueError: If the value is not numeric.
            OverflowError: If the value is outside the float range.
        """
        value = self.get()
        try:
            result = float(value.strip() if isinstance(value, str) else value)
        except OverflowError as exc:
            raise OverflowError(f"{self.to_string()!r} is out of float range") from exc
        if math.isinf(result):
            raise OverflowError(f"{self.to_string()!r} is out of float range")
        return result

    def to_list(self) -> List[Any]:
        return [self.get()]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()!r})"
