"""
BlockSeal Canonical JSON Encoding

Produces the stable byte representation a block is hashed over.
Structurally equal values always produce identical bytes.
"""

import json
from typing import Any, Dict, List, Union

from .errors import SerializationError


def canonicalize(obj: Any) -> bytes:
    """
    Convert an object to canonical JSON bytes.

    Rules:
    - Object keys sorted lexicographically (Unicode code point order)
    - No whitespace between tokens (compact form)
    - UTF-8 encoding, no BOM, non-ASCII characters left unescaped
    - Arrays preserve order

    Returns:
        UTF-8 encoded bytes of canonical JSON

    Raises:
        SerializationError: If the object holds a value JSON cannot carry
    """
    canonical = _canonicalize_value(obj)
    try:
        return json.dumps(canonical, separators=(',', ':'), ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise SerializationError(f"Serialization error: {e}") from e


def canonicalize_str(obj: Any) -> str:
    """Return canonical JSON as string."""
    return canonicalize(obj).decode('utf-8')


def _canonicalize_value(value: Any) -> Any:
    """Recursively canonicalize a value."""
    if value is None:
        return None
    elif isinstance(value, bool):
        return value
    elif isinstance(value, int):
        return value
    elif isinstance(value, str):
        return value
    elif isinstance(value, dict):
        return _canonicalize_object(value)
    elif isinstance(value, (list, tuple)):
        return _canonicalize_array(value)
    else:
        raise SerializationError(f"Serialization error: cannot canonicalize type {type(value).__name__}")


def _canonicalize_object(obj: Dict[str, Any]) -> Dict[str, Any]:
    for key in obj:
        if not isinstance(key, str):
            raise SerializationError(f"Serialization error: object key must be str, got {type(key).__name__}")
    return {k: _canonicalize_value(obj[k]) for k in sorted(obj.keys())}


def _canonicalize_array(arr: Union[List, tuple]) -> List:
    return [_canonicalize_value(item) for item in arr]
