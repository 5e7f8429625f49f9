# clab_editor/core/equality.py

"""Order-independent structural equality for JSON-like values."""

import json
from collections.abc import Mapping
from typing import Any


class _Unset:
    """Marker for "no value", distinct from ``None`` (a YAML/JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET: Any = _Unset()


def normalize(value):
    """
    Canonicalize a nested value for comparison.

    Record keys are sorted, arrays keep their element order and scalars are
    returned unchanged. Record entries holding ``UNSET`` are dropped, so two
    records that differ only in an unset key normalize to the same form.

    Parameters
    ----------
    value : Any
        A scalar, a list/tuple or a mapping, possibly nested.

    Returns
    -------
    Any
        The canonical form of ``value``.
    """
    if isinstance(value, Mapping):
        return {
            key: normalize(value[key])
            for key in sorted(value, key=str)
            if value[key] is not UNSET
        }
    if isinstance(value, (list, tuple)):
        return [None if item is UNSET else normalize(item) for item in value]
    return value


def _plain(value):
    # 1.0 and 1 are the same JSON number
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def canonical_dumps(value) -> str | None:
    """
    Serialize ``normalize(value)`` to compact JSON.

    Returns ``None`` for a top-level ``UNSET``, which has no serialized form.
    Scalars JSON cannot represent (e.g. dates parsed from YAML) go through
    ``str``.
    """
    if value is UNSET:
        return None
    return json.dumps(
        _plain(normalize(value)),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def deep_equal(a, b) -> bool:
    """
    Compare two values structurally.

    Record key order is ignored, array order is significant.

    Examples
    --------
    >>> deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})
    True
    >>> deep_equal([1, 2], [2, 1])
    False
    """
    return canonical_dumps(a) == canonical_dumps(b)
