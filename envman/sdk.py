"""Discovery of installed SDKs under an SDK root folder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class SDKInfo:
    """One installed version of an SDK."""

    name: str
    version: str
    path: str


def _sorted_dirs(path: PathLike) -> list[os.DirEntry]:
    with os.scandir(path) as entries:
        return sorted(
            (entry for entry in entries if entry.is_dir(follow_symlinks=False)),
            key=lambda entry: entry.name,
        )


def discover_sdks(sdk_root: PathLike) -> dict[str, list[SDKInfo]]:
    """Map each SDK name under ``sdk_root`` to its versions, sorted by name.

    Languages without any version folder are left out. Raises OSError when
    ``sdk_root`` cannot be read.
    """
    root = os.fspath(sdk_root)
    sdks: dict[str, list[SDKInfo]] = {}
    for lang_entry in _sorted_dirs(root):
        lang_path = os.path.join(root, lang_entry.name)
        try:
            versions = _sorted_dirs(lang_path)
        except OSError:
            continue
        infos = [
            SDKInfo(name=lang_entry.name, version=v.name, path=os.path.join(lang_path, v.name))
            for v in versions
        ]
        if infos:
            sdks[lang_entry.name] = infos
    return sdks