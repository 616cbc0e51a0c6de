"""src/valuewrap/http/context.py

Current-request information used to build the URL of the running request.
"""

import urllib.parse
from dataclasses import dataclass
from typing import Mapping, Optional

from valuewrap.types.string import String

__all__ = ["RequestContext"]


@dataclass
class RequestContext:
    """
    Read-only view of the request being served.

    Attributes:
        secure: Whether the request came in over TLS.
        host: Value of the Host header.
        port: Server port the request was received on.
        path: Request path, without query string or trailing slash.
        query: Raw query string, without the leading "?".
        cookie: Raw Cookie header.
    """

    secure: bool = False
    host: Optional[str] = None
    port: Optional[int] = None
    path: str = ""
    query: Optional[str] = None
    cookie: Optional[str] = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "RequestContext":
        """
        Create a RequestContext from a WSGI/CGI environ mapping.

        Reads HTTPS, HTTP_HOST, SERVER_PORT, REQUEST_URI (falling back to
        SCRIPT_NAME), QUERY_STRING and HTTP_COOKIE.
        """
        port: Optional[int] = None
        raw_port = environ.get("SERVER_PORT")
        if raw_port and raw_port.isdigit():
            port = int(raw_port)

        request_uri = environ.get("REQUEST_URI") or environ.get("SCRIPT_NAME") or ""
        path = urllib.parse.urlsplit(request_uri).path.rstrip("/")

        return cls(
            secure=String(environ.get("HTTPS")).to_bool(),
            host=environ.get("HTTP_HOST") or None,
            port=port,
            path=path,
            query=environ.get("QUERY_STRING") or None,
            cookie=environ.get("HTTP_COOKIE") or None,
        )

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"
