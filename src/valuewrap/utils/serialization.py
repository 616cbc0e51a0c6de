"""utils/serialization.py

Serialization utilities for Valuewrap (JSON encoding of composite values).
"""

import dataclasses
import json
from typing import Any

__all__ = ["to_json", "from_json"]


def _default(obj: Any) -> Any:
    """Fallback encoder for values the json module does not know."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    if hasattr(obj, "__dict__"):
        return vars(obj)
    return str(obj)


def to_json(data: Any) -> str:
    """Serializes data to a JSON string."""
    return json.dumps(data, default=_default)


def from_json(text: str) -> Any:
    """Deserializes a JSON string produced by to_json."""
    return json.loads(text)
