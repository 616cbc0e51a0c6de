"""src/valuewrap/exceptions.py

Valuewrap Exceptions hierarchy.
"""


class ValueWrapError(Exception):
    """Base exception for all Valuewrap errors."""


class ConversionError(ValueWrapError):
    """
    A value could not be converted to the target wrapper type.

    Raised when the input's kind has no conversion routine on the wrapper.
    """

    def __init__(self, kind: str, target: str):
        self.kind = kind
        self.target = target
        super().__init__(
            f'The value of type "{kind}" could not be converted to "{target}".'
        )


class ParseError(ValueWrapError):
    """
    Errors related to URL parsing.
    Raised when text cannot be split into URL components.
    """
