"""src/valuewrap/types/__init__.py

Wrapped value types.

This module provides the polymorphic construction machinery (input
classification and dispatch) and the scalar wrappers built on it.
"""

from .base import InputKind, Type, classify
from .scalar import Scalar
from .string import String

__all__ = ["InputKind", "Type", "classify", "Scalar", "String"]
