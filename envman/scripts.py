"""Generation of shell activation scripts."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def _join(*parts: PathLike) -> str:
    return os.path.normpath(os.path.join(*(os.fspath(p) for p in parts)))


def _write(path: str, text: str) -> Path:
    target = Path(path)
    with open(target, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)
    return target


def generate_activate_bat(config: Mapping[str, str], sdk_root: PathLike, out_dir: PathLike) -> Path:
    """Write activate.bat for CMD into ``out_dir`` and return its path."""
    lines = ["@echo off\n"]
    for lang, version in config.items():
        home = _join(sdk_root, lang, version)
        lines.append(f"set {lang}_HOME={home}\n")
        lines.append(f"set PATH={_join(sdk_root, lang, version, 'bin')};%PATH%\n")
    return _write(os.path.join(os.fspath(out_dir), "activate.bat"), "".join(lines))


def generate_activate_ps1(config: Mapping[str, str], sdk_root: PathLike, out_dir: PathLike) -> Path:
    """Write activate.ps1 for PowerShell into ``out_dir`` and return its path."""
    lines = []
    for lang, version in config.items():
        home = _join(sdk_root, lang, version)
        lines.append(f"$env:{lang}_HOME = '{home}'\n")
        lines.append(f"$env:PATH = '{_join(sdk_root, lang, version, 'bin')};' + $env:PATH\n")
    return _write(os.path.join(os.fspath(out_dir), "activate.ps1"), "".join(lines))