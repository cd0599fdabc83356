"""Toolchain descriptions in YAML and the steps they run."""

from __future__ import annotations

import contextlib
import os
import re
import subprocess
import sys
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, TextIO, Union

import yaml

PathLike = Union[str, "os.PathLike[str]"]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"expected a scalar, got {type(value).__name__}")


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    return [_as_str(item) for item in value]


@dataclass
class Step:
    """One step of a toolchain setup."""

    type: str = ""
    var: str = ""
    message: str = ""
    default: str = ""
    options: list[str] = field(default_factory=list)
    when: str = ""
    command: str = ""
    args: list[str] = field(default_factory=list)
    path: str = ""
    content: str = ""
    text: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Step:
        """Build a step from a parsed YAML mapping; unknown keys are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"step must be a mapping, got {type(data).__name__}")
        return cls(
            type=_as_str(data.get("type")),
            var=_as_str(data.get("var")),
            message=_as_str(data.get("message")),
            default=_as_str(data.get("default")),
            options=_as_str_list(data.get("options")),
            when=_as_str(data.get("when")),
            command=_as_str(data.get("command")),
            args=_as_str_list(data.get("args")),
            path=_as_str(data.get("path")),
            content=_as_str(data.get("content")),
            text=_as_str(data.get("text")),
        )


@dataclass
class ToolchainConfig:
    """A named toolchain with its setup steps and environment variables."""

    name: str = ""
    steps: list[Step] = field(default_factory=list)
    env_vars: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ToolchainConfig:
        """Build a configuration from a parsed YAML mapping."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"toolchain config must be a mapping, got {type(data).__name__}")
        steps = data.get("steps") or []
        if not isinstance(steps, list):
            raise ValueError("steps must be a list")
        env_vars = data.get("env_vars") or {}
        if not isinstance(env_vars, Mapping):
            raise ValueError("env_vars must be a mapping")
        return cls(
            name=_as_str(data.get("name")),
            steps=[Step.from_mapping(step) for step in steps],
            env_vars={_as_str(k): _as_str(v) for k, v in env_vars.items()},
        )


def load_toolchain_config(path: PathLike) -> ToolchainConfig:
    """Load a toolchain description from a YAML file."""
    with open(path, encoding="utf-8") as handle:
        loaded = list(yaml.safe_load_all(handle))
    if not loaded:
        raise ValueError(f"{path}: empty toolchain config")
    return ToolchainConfig.from_mapping(loaded[0])


def substitute(text: str, variables: Mapping[str, str]) -> str:
    """Replace every ``{name}`` in ``text`` with its value from ``variables``."""
    for key, value in variables.items():
        text = text.replace("{" + key + "}", value)
    return text


def eval_condition(condition: str, variables: Mapping[str, str]) -> bool:
    """Evaluate a ``left == "right"`` condition after substitution."""
    parts = substitute(condition, variables).split("==")
    if len(parts) != 2:
        return False
    left, right = parts
    return left.strip() == right.strip(' "').strip()


def _read_line(stream: TextIO) -> str:
    return stream.readline() or ""


def _read_choice(stream: TextIO, count: int) -> int:
    match = _LEADING_INT.match(_read_line(stream))
    choice = int(match.group(1)) if match else 0
    return choice if 1 <= choice <= count else 1


def run_toolchain_steps(
    config: ToolchainConfig,
    variables: MutableMapping[str, str],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> MutableMapping[str, str]:
    """Run the steps of ``config``, updating ``variables`` with the answers.

    Raises RuntimeError when a command step fails.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    for step in config.steps:
        if step.when and not eval_condition(step.when, variables):
            continue
        if step.type == "prompt":
            message = substitute(step.message, variables)
            default = substitute(step.default, variables)
            stdout.write(f"{message} [{default}]: ")
            stdout.flush()
            answer = _read_line(stdin).strip()
            variables[step.var] = answer or default
        elif step.type == "select":
            if not step.options:
                raise ValueError(f"select step for {step.var!r} has no options")
            print(substitute(step.message, variables), file=stdout)
            for number, option in enumerate(step.options, start=1):
                print(f"  [{number}] {option}", file=stdout)
            stdout.write("Enter number [1]: ")
            stdout.flush()
            variables[step.var] = step.options[_read_choice(stdin, len(step.options)) - 1]
        elif step.type == "run":
            command = substitute(step.command, variables)
            args = [substitute(arg, variables) for arg in step.args]
            print(f"Running: {command} {' '.join(args)}", file=stdout)
            stdout.flush()
            try:
                subprocess.run([command, *args], check=True)
            except (OSError, subprocess.CalledProcessError) as exc:
                raise RuntimeError(f"command failed: {exc}") from exc
        elif step.type == "file":
            path = substitute(step.path, variables)
            content = substitute(step.content, variables)
            with contextlib.suppress(OSError), open(path, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        elif step.type == "message":
            print(substitute(step.text, variables), file=stdout)
    return variables