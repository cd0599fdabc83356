"""Reading and writing the envman.json environment file."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def load_env_config(path: PathLike) -> dict[str, str]:
    """Load a mapping of toolchain name to version from a JSON file.

    Raises OSError when the file cannot be read and ValueError when its
    content is not a JSON object of strings.
    """
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"{path}: value for {key!r} is not a string")
    return dict(data)


def save_env_config(path: PathLike, config: Mapping[str, str]) -> None:
    """Write the configuration as indented JSON with sorted keys."""
    with open(path, "w", encoding="utf-8", newline="\n") as handle:
        json.dump(dict(config), handle, indent=2, sort_keys=True, ensure_ascii=False)
        handle.write("\n")