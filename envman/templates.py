"""Copying of template files into a project."""

from __future__ import annotations

import os
import shutil
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def copy_template(src: PathLike, dst: PathLike) -> bool:
    """Copy ``src`` to ``dst`` unless ``dst`` already exists.

    Returns True when a copy was made. Raises OSError when the source
    cannot be read or the destination cannot be written.
    """
    if os.path.exists(dst):
        return False
    shutil.copyfile(src, dst)
    return True