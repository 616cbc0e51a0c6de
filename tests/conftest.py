import pytest

from valuewrap import Url


@pytest.fixture
def request_environ():
    """Fixture providing a WSGI/CGI style environ for an HTTPS request."""
    return {
        "HTTPS": "on",
        "HTTP_HOST": "example.com",
        "SERVER_PORT": "443",
        "REQUEST_URI": "/shop/cart/?id=5",
        "SCRIPT_NAME": "/index.py",
        "QUERY_STRING": "id=5",
        "HTTP_COOKIE": "session=abc123",
    }


@pytest.fixture
def segmented_url():
    """Fixture providing a URL with three path segments."""
    return Url.create("http://example.com/zero/one/two")
