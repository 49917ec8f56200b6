"""
common_helpers - a collection of commonly used helper functions.

Re-exports the public helpers so callers can write
``from common_helpers import clamp, merge``. ``map`` is importable by name
but left out of ``__all__`` so star-imports never shadow the builtin; use
``map_range`` there.
"""

from common_helpers.utils.math import (
    clamp,
    lerp,
    linstep,
    map,
    map_range,
    pulse,
    smoothstep,
    step,
)
from common_helpers.utils.objects import (
    deep,
    deep_merge,
    extend,
    inherit,
    is_linked,
    link,
    merge,
)

__all__ = [
    "clamp",
    "lerp",
    "map_range",
    "step",
    "pulse",
    "smoothstep",
    "linstep",
    "link",
    "inherit",
    "is_linked",
    "merge",
    "extend",
    "deep_merge",
    "deep",
]
