"""Utility functions for cleanroom-config."""

import json
from typing import Any


def dump_json(value: Any) -> str:
    """Serialize a JSON-compatible value the way configuration files are stored.

    Two-space indentation, keys in insertion order, non-ASCII characters kept
    as-is, and a trailing newline.

    Examples:
        >>> dump_json({"a": [1, 2]})
        '{\\n  "a": [\\n    1,\\n    2\\n  ]\\n}\\n'

        >>> dump_json({})
        '{}\\n'
    """
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


def is_string_list(value: Any) -> bool:
    """Return True for a list whose items are all strings.

    Examples:
        >>> is_string_list(["a", "b"])
        True

        >>> is_string_list(("a", "b"))
        False
    """
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
