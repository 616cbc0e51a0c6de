"""src/valuewrap/http/url.py

URL builder and parser for Valuewrap.

A ``Url`` keeps a URL as structured fields (scheme, host, port, credentials,
path segments, query parameters, fragment). The string form is rebuilt from
those fields on demand::

    url = Url.create("http://www.example.com/path/to/file?foo=bar")
    url.get_parameter("foo")            # "bar"
    url.set_parameter("bar", "baz")
    url.set_segment(3, "somewhere")
    url.to_string()  # "http://www.example.com/path/to/file/somewhere?foo=bar&bar=baz"

Path segments are stored as they appear in the text and are only percent
decoded or encoded on request (``decode_path``/``encode_path``). Query
parameters are stored decoded and encoded again when serialized.
"""

import logging
import os
import re
import urllib.parse
from typing import Any, Dict, List, Optional, Union

from valuewrap.exceptions import ParseError
from valuewrap.http.context import RequestContext
from valuewrap.types.base import read_stream
from valuewrap.types.scalar import Scalar
from valuewrap.types.string import String
from valuewrap.utils.serialization import to_json

__all__ = ["Url"]

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_MAX_PORT = 65535

_SPECIAL_CHARS = re.compile(r"[^A-Za-z0-9_\-]+")
_UNDERSCORES = re.compile(r"_+")
# "host:port" with no scheme, which urlsplit reads as scheme "host".
_BARE_PORT = re.compile(r"\d+(/|$)")


def _parameter_text(value: Any) -> str:
    """Text stored for a query parameter value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Scalar):
        return value.to_string()
    try:
        return to_json(value)
    except (TypeError, ValueError):
        # non-string keys or circular references
        return str(value)


def _segment_text(value: Any) -> str:
    return value.to_string() if isinstance(value, Scalar) else str(value)


class Url(Scalar):
    """
    Structured, mutable URL.

    Attributes:
        scheme: URL scheme (e.g. "https"), None if relative.
        host: Host exactly as written, None if absent.
        port: Explicit port, None if absent.
        user: User name from the authority, None if absent.
        password: Password from the authority, None if absent.
        path_segments: "/"-delimited path tokens, in order.
        parameters: Decoded query parameters, insertion ordered.
        fragment: Fragment without the leading "#", None if absent.
    """

    # pylint: disable=too-many-instance-attributes,too-many-public-methods
    __slots__ = (
        "scheme",
        "host",
        "port",
        "user",
        "password",
        "path_segments",
        "parameters",
        "fragment",
    )

    def _from_object(self, value: Any) -> bool:
        return self._adopt(_segment_text(value))

    def _from_string(self, value: str) -> bool:
        return self._adopt(value)

    def _from_stream(self, value: Any) -> bool:
        try:
            text = read_stream(value)
        except UnicodeDecodeError as exc:
            raise ParseError("URL stream is not valid UTF-8 text") from exc
        return self._adopt(text)

    def _adopt(self, text: str) -> bool:
        self.original = text
        self._parse(text)
        return True

    def _parse(self, text: str) -> None:
        try:
            parts = urllib.parse.urlsplit(text)
        except ValueError as exc:
            raise ParseError(f"Invalid URL {text!r}: {exc}") from exc
        if parts.scheme and not parts.netloc and _BARE_PORT.match(parts.path):
            try:
                parts = urllib.parse.urlsplit("//" + text.lstrip())
            except ValueError as exc:
                raise ParseError(f"Invalid URL {text!r}: {exc}") from exc

        self.scheme = parts.scheme or None
        if parts.netloc:
            self._parse_authority(parts.netloc)

        path = parts.path
        if path:
            if path.startswith("/"):
                path = path[1:]
            self.path_segments = path.split("/")

        if parts.query:
            self.parameters = dict(
                urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
            )

        self.fragment = parts.fragment or None

        logger.debug(
            "Parsed URL: scheme=%s host=%s port=%s segments=%d parameters=%d",
            self.scheme,
            self.host,
            self.port,
            len(self.path_segments),
            len(self.parameters),
        )

    def _parse_authority(self, netloc: str) -> None:
        userinfo, has_userinfo, hostport = netloc.rpartition("@")
        if has_userinfo:
            user, has_password, password = userinfo.partition(":")
            self.user = user
            self.password = password if has_password else None

        if hostport.startswith("["):
            host_end = hostport.find("]")
            if host_end == -1:
                raise ParseError(f"Unterminated IPv6 host in {netloc!r}")
            self.host = hostport[: host_end + 1]
            rest = hostport[host_end + 1 :]
            if rest and not rest.startswith(":"):
                raise ParseError(f"Unexpected text after IPv6 host in {netloc!r}")
            port = rest[1:]
        else:
            host, _, port = hostport.partition(":")
            self.host = host or None

        if port:
            if not (port.isascii() and port.isdigit()) or int(port) > _MAX_PORT:
                raise ParseError(f"Invalid port {port!r} in {netloc!r}")
            self.port = int(port)

    def clear(self) -> "Url":
        """Empty every component."""
        self.original = ""
        self.scheme = None
        self.host = None
        self.port = None
        self.user = None
        self.password = None
        self.path_segments: List[str] = []
        self.parameters: Dict[str, str] = {}
        self.fragment = None
        return self

    def get(self) -> str:
        return self.to_string()

    @property
    def current(self) -> str:
        """The canonical string, always in sync with the structured fields."""
        return self.to_string()

    def to_string(self) -> str:
        """
        Serialize the structured fields.

        Unset components are left out entirely.

        Returns:
            ``[scheme://][user[:password]@]host[:port][/segments][?query][#fragment]``
        """
        result = ""
        if self.scheme:
            result += self.scheme + "://"
        elif self.host is not None or self.user is not None:
            result += "//"
        if self.user is not None:
            result += self.user
            if self.password is not None:
                result += ":" + self.password
            result += "@"
        if self.host is not None:
            result += self.host
        if self.port is not None:
            result += f":{self.port}"
        if self.path_segments:
            result += "/" + "/".join(self.path_segments)
        if self.parameters:
            result += "?" + urllib.parse.urlencode(self.parameters)
        if self.fragment is not None:
            result += "#" + self.fragment
        return result

    def copy(self) -> "Url":
        """Return an independent copy of this URL."""
        clone = type(self)()
        clone.original = self.original
        clone.scheme = self.scheme
        clone.host = self.host
        clone.port = self.port
        clone.user = self.user
        clone.password = self.password
        clone.path_segments = list(self.path_segments)
        clone.parameters = dict(self.parameters)
        clone.fragment = self.fragment
        return clone

    def __copy__(self) -> "Url":
        return self.copy()

    # Path segments

    def get_segment(self, index: Union[int, str] = 0) -> Optional[str]:
        """
        Get a path segment.

        For ``Url.create("http://example.com/zero/one/two")``::

            url.get_segment("first")  # "zero"
            url.get_segment(1)        # "one"
            url.get_segment("last")   # "two"

        Args:
            index: Offset (negative counts from the end), "first" or "last".

        Returns:
            The segment, or None if there is none at that position.
        """
        if not self.path_segments:
            return None
        if index == "first":
            return self.path_segments[0]
        if index == "last":
            return self.path_segments[-1]
        if not isinstance(index, int) or not self.has_segment(index):
            return None
        return self.path_segments[index]

    def has_segment(self, index: int) -> bool:
        return -len(self.path_segments) <= index < len(self.path_segments)

    def set_segment(self, index: int, value: Any) -> "Url":
        """
        Set a path segment.

        Writing at or past the end appends the value as the new last segment.

        Raises:
            IndexError: If a negative index reaches before the first segment.
        """
        if index >= len(self.path_segments):
            return self.append_segment(value)
        if index < -len(self.path_segments):
            raise IndexError(f"Path segment index {index} out of range")
        self.path_segments[index] = _segment_text(value)
        return self

    def append_segment(self, value: Any) -> "Url":
        self.path_segments.append(_segment_text(value))
        return self

    def remove_segment(self, index: int) -> "Url":
        """Remove a path segment; missing offsets are ignored."""
        if self.has_segment(index):
            del self.path_segments[index]
        return self

    def segment_count(self) -> int:
        return len(self.path_segments)

    def decode_path(self) -> "Url":
        """Percent-decode every path segment in place."""
        self.path_segments = [urllib.parse.unquote(s) for s in self.path_segments]
        return self

    def encode_path(self) -> "Url":
        """Percent-encode every path segment in place, "/" included."""
        self.path_segments = [
            urllib.parse.quote(s, safe="") for s in self.path_segments
        ]
        return self

    # Query parameters

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """
        Get a query parameter value.

        Args:
            key: Parameter name.
            default: Returned when the parameter is not set.
        """
        return self.parameters.get(key, default)

    def has_parameter(self, key: str) -> bool:
        return key in self.parameters

    def set_parameter(self, key: str, value: Any) -> "Url":
        """
        Set a query parameter, replacing any previous value.

        Booleans are stored as "true"/"false" and composite values (lists,
        dicts, objects) as JSON. Setting None removes the parameter.
        """
        if value is None:
            return self.remove_parameter(key)
        self.parameters[key] = _parameter_text(value)
        return self

    def remove_parameter(self, key: str) -> "Url":
        self.parameters.pop(key, None)
        return self

    # Normalization and comparison

    def tidy(self) -> "Url":
        """
        Normalize path segments.

        Trims whitespace, replaces "&" with "and" and collapses every run of
        characters other than letters, digits, "_" and "-" into one "_".
        """
        self.path_segments = [
            String(segment)
            .trim()
            .simple_replace("&", "and")
            .replace(_SPECIAL_CHARS, "_")
            .replace(_UNDERSCORES, "_")
            .get()
            for segment in self.path_segments
        ]
        return self

    def compare_to(
        self,
        other: Any,
        case_sensitive: bool = True,
        include_query: bool = False,
        ignore_special_chars: bool = False,
    ) -> int:
        """
        Compare this URL with another.

        Both sides are copied and path-decoded before comparing; neither
        operand is modified.

        Args:
            other: A Url or any value a Url can be created from.
            case_sensitive: Compare case-sensitively.
            include_query: Include query parameters in the comparison.
            ignore_special_chars: Tidy both paths before comparing.

        Returns:
            < 0 if this URL sorts before ``other``, > 0 if after, 0 if equal.
        """
        left = self.copy().decode_path()
        right = other.copy() if isinstance(other, Url) else Url(other)
        right.decode_path()

        if ignore_special_chars:
            left.tidy()
            right.tidy()
        if not include_query:
            left.parameters = {}
            right.parameters = {}

        left_text = left.to_string()
        right_text = right.to_string()
        if not case_sensitive:
            left_text = left_text.lower()
            right_text = right_text.lower()
        return (left_text > right_text) - (left_text < right_text)

    # Predicates

    def is_full_url(self) -> bool:
        """True if this is an absolute URL rather than just a path."""
        return bool(self.scheme)

    def as_string(self) -> String:
        """Return this URL as a String wrapper."""
        return String(self.to_string())

    def is_https(self) -> bool:
        return self.as_string().starts_with("https://")

    # Current request

    @classmethod
    def from_request(
        cls, context: Optional[RequestContext] = None, include_query: bool = True
    ) -> "Url":
        """
        Build the URL of the current request.

        Args:
            context: Request details; read from ``os.environ`` when omitted.
            include_query: Append the request's query string.

        Returns:
            The request URL, or ``Url("cli")`` when there is no request host.
        """
        if context is None:
            context = RequestContext.from_environ(os.environ)
        if not context.host:
            return cls("cli")

        url = f"{context.scheme}://{context.host}"
        host_has_port = ":" in context.host.rsplit("]", 1)[-1]
        if (
            context.port is not None
            and context.port != _DEFAULT_PORTS[context.scheme]
            and not host_has_port
        ):
            url += f":{context.port}"
        url += context.path
        if include_query and context.query:
            url += "?" + context.query
        return cls(url)
