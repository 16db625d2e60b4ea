"""Utility helpers shared by stores, services and handlers."""

from .callables import callable_name, resolve
from .json_merge import merge_json_objects
from .keys import time_ordered_key
from .timing import time_track

__all__ = [
    "callable_name",
    "resolve",
    "merge_json_objects",
    "time_track",
    "time_ordered_key",
]
