"""Conversion of simple objects to string mappings."""

from __future__ import annotations

import dataclasses
from typing import Any


def struct_to_map(obj: Any) -> dict[str, str]:
    """Return the public string-valued attributes of ``obj`` as a dict.

    Dataclass fields are taken in declaration order; for other objects
    the instance attributes are used. Attributes whose names start with an
    underscore and values that are not strings are left out.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        items = ((field.name, getattr(obj, field.name)) for field in dataclasses.fields(obj))
    elif hasattr(obj, "__dict__"):
        items = vars(obj).items()
    else:
        raise TypeError(f"cannot convert {type(obj).__name__} to a mapping")
    return {
        name: value
        for name, value in items
        if not name.startswith("_") and isinstance(value, str)
    }