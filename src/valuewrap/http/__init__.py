"""src/valuewrap/http/__init__.py"""

from .context import RequestContext
from .url import Url

__all__ = ["RequestContext", "Url"]
