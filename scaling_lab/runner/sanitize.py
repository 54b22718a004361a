"""Make nested numeric results safe to serialise as JSON."""

from __future__ import annotations

import math
import numbers
from typing import Any


def sanitize(value: Any) -> Any:
    """Replace every non-finite number in *value* with ``0.0``.

    Walks mappings (keys untouched) and sequences (order kept); anything
    else that is not a number passes through unchanged.  Strings and
    bytes are treated as scalars, not sequences.  Cyclic input is not
    supported.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Real):
        return value if math.isfinite(value) else 0.0
    if isinstance(value, dict):
        return {k: sanitize(v) for k, v in value.items()}
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, tuple):
        return tuple(sanitize(v) for v in value)
    if isinstance(value, list):
        return [sanitize(v) for v in value]
    return value
