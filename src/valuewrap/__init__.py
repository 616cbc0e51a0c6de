"""src/valuewrap/__init__.py

Valuewrap - Typed value wrappers and a structured URL model for Python.

Valuewrap wraps native values (objects, booleans, numbers, text, lists and
byte streams) in typed objects built through a single conversion gate, and
keeps URLs both as a canonical string and as editable components.

Key Features:
    - Zero external dependencies
    - One construction path per wrapper with typed conversion errors
    - Round-trippable URL parsing and serialization
    - Explicit path segment and query parameter accessors
    - Full type hints (PEP 561)
    - Memory optimized with __slots__

Example:
    URL usage::

        from valuewrap import Url

        url = Url.create('http://www.example.com/path/to/file?foo=bar')
        url.get_parameter('foo')         # 'bar'
        url.set_parameter('bar', 'some-new-value')
        url.get_segment('last')          # 'file'
        print(url.to_string())

    String usage::

        from valuewrap import String

        String('  Fish & Chips ').trim().simple_replace('&', 'and').get()
"""

import logging

from valuewrap.exceptions import ConversionError, ParseError, ValueWrapError
from valuewrap.http.context import RequestContext
from valuewrap.http.url import Url
from valuewrap.types.base import InputKind, Type, classify
from valuewrap.types.scalar import Scalar
from valuewrap.types.string import String
from valuewrap.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Type",
    "InputKind",
    "classify",
    "Scalar",
    "String",
    "Url",
    "RequestContext",
    "ValueWrapError",
    "ConversionError",
    "ParseError",
    "__version__",
]
