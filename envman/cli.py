"""Command-line interface for managing portable SDK environments."""

from __future__ import annotations

import argparse
import contextlib
import os
import re
import sys
from pathlib import Path

import yaml

from envman.config import load_env_config, save_env_config
from envman.scripts import generate_activate_bat, generate_activate_ps1
from envman.sdk import discover_sdks
from envman.templates import copy_template
from envman.toolchain import load_toolchain_config, run_toolchain_steps

CONFIG_FILE = "envman.json"
TOOLCHAINS_DIR = "toolchains"
TEMPLATES = (".gitignore", "README.md")

_BASE_DESCRIPTION = "Manage and activate portable SDK environments"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def list_toolchains(directory: str | os.PathLike[str] = TOOLCHAINS_DIR) -> list[str]:
    """Return the toolchain names described by ``envman_<name>.yaml`` files.

    Raises OSError when ``directory`` cannot be read.
    """
    with os.scandir(directory) as entries:
        names = sorted(
            entry.name
            for entry in entries
            if not entry.is_dir()
            and entry.name.startswith("envman_")
            and entry.name.endswith(".yaml")
        )
    return [name[len("envman_"):-len(".yaml")] for name in names]


def default_sdk_root() -> str:
    """Return the ``envman_sdks`` folder next to the running program."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not program:
        return os.path.join(".", "envman_sdks")
    try:
        folder = Path(program).resolve().parent
    except OSError:
        return os.path.join(".", "envman_sdks")
    return str(folder / "envman_sdks")


def long_description(directory: str | os.PathLike[str] = TOOLCHAINS_DIR) -> str:
    """Describe the program, naming the toolchains found in ``directory``."""
    try:
        names = list_toolchains(directory)
    except OSError:
        names = []
    if not names:
        return _BASE_DESCRIPTION + "."
    return f"{_BASE_DESCRIPTION} for: {', '.join(names)}."


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _prompt(text: str) -> str:
    sys.stdout.write(text)
    sys.stdout.flush()
    return sys.stdin.readline()


def _parse_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _sdk_root(args: argparse.Namespace) -> str:
    return args.sdk_root or default_sdk_root()


def _cmd_activate(args: argparse.Namespace) -> int:
    try:
        config = load_env_config(CONFIG_FILE)
    except (OSError, ValueError) as exc:
        _error(
            "Error: envman.json not found or invalid. Run 'envman init' or 'envman select' first.\n"
            f"Details: {exc}"
        )
        return 1
    try:
        toolchains = list_toolchains()
    except OSError as exc:
        _error(f"Failed to read toolchains folder: {exc}")
        return 1
    selected = {name: config[name] for name in toolchains if config.get(name)}
    root = _sdk_root(args)
    failed = False
    try:
        generate_activate_bat(selected, root, ".")
    except OSError as exc:
        _error(f"Failed to generate activate.bat: {exc}")
        failed = True
    try:
        generate_activate_ps1(selected, root, ".")
    except OSError as exc:
        _error(f"Failed to generate activate.ps1: {exc}")
        failed = True
    if failed:
        return 1
    print("Activation scripts generated: activate.bat, activate.ps1")
    return 0


def _cmd_deactivate(args: argparse.Namespace) -> int:
    _error("To deactivate, close your shell or manually restore your previous PATH and environment variables.")
    _error("(Optional: implement a more advanced deactivate script if needed.)")
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    config_path = os.path.join(".", CONFIG_FILE)
    if os.path.exists(config_path):
        print("envman.json already exists in this folder.")
        return 0
    root = _sdk_root(args)
    try:
        sdks = discover_sdks(root)
    except OSError as exc:
        print("Error discovering SDKs:", exc)
        return 0
    try:
        toolchains = list_toolchains()
    except OSError as exc:
        print("Failed to read toolchains folder:", exc)
        return 0
    if not toolchains:
        print(f"No toolchains found in {TOOLCHAINS_DIR}")
        return 1

    print("Select a toolchain to initialize:")
    for number, name in enumerate(toolchains, start=1):
        print(f"  [{number}] {name}")
    choice = _parse_int(_prompt("Enter number [1]: "))
    if choice is None or not 1 <= choice <= len(toolchains):
        choice = 1
    selected = toolchains[choice - 1]

    infos = sdks.get(selected, [])
    if not infos:
        print(f"No SDKs found for {selected} in {root}")
        return 0
    version = infos[-1].version
    print(f"Using {selected} version: {version}")

    try:
        toolchain = load_toolchain_config(os.path.join(TOOLCHAINS_DIR, f"envman_{selected}.yaml"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print("Failed to load toolchain config:", exc)
        return 0
    variables = {
        "version": version,
        "cwd_basename": os.path.basename(os.getcwd()),
        "sdk_root": root,
    }
    try:
        run_toolchain_steps(toolchain, variables, sys.stdin, sys.stdout)
    except (RuntimeError, ValueError) as exc:
        print("Error during toolchain init:", exc)
        return 0

    try:
        save_env_config(config_path, {selected: version})
    except OSError as exc:
        print("Failed to write envman.json:", exc)
        return 0
    print(f"Initialized new {selected} environment with version {version}.")

    for template in TEMPLATES:
        source = os.path.join(root, "..", "templates", template)
        with contextlib.suppress(OSError):
            copy_template(source, os.path.join(".", template))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    try:
        sdks = discover_sdks(_sdk_root(args))
    except OSError as exc:
        _error(f"Error discovering SDKs: {exc}")
        return 1
    if not sdks:
        _error("No SDKs found in the specified sdkRoot.")
        return 1
    for lang, infos in sdks.items():
        print(f"{lang}:")
        if not infos:
            print("  (none found)")
        for info in infos:
            print(f"  {info.version}")
    return 0


def _cmd_select(args: argparse.Namespace) -> int:
    try:
        sdks = discover_sdks(_sdk_root(args))
    except OSError as exc:
        _error(f"Error discovering SDKs: {exc}")
        return 1
    try:
        toolchains = list_toolchains()
    except OSError as exc:
        _error(f"Failed to read toolchains folder: {exc}")
        return 1
    config: dict[str, str] = {}
    for lang in toolchains:
        infos = sdks.get(lang, [])
        if not infos:
            _error(f"Warning: No {lang} SDKs found.")
            continue
        print(f"Available {lang} versions:")
        for number, info in enumerate(infos, start=1):
            print(f"  [{number}] {info.version}")
        version = infos[-1].version
        answer = _prompt(f"Select {lang} version [default: {version}]: ").strip()
        if answer:
            index = _parse_int(answer) or 0
            if 0 < index <= len(infos):
                version = infos[index - 1].version
        config[lang] = version
    try:
        save_env_config(CONFIG_FILE, config)
    except OSError as exc:
        _error(f"Failed to save envman.json: {exc}")
        return 1
    print("Updated envman.json with selected SDK versions.")
    return 0


def _cmd_use(args: argparse.Namespace) -> int:
    env = args.env
    if env is None or env == "local":
        config_path = os.path.join(".", CONFIG_FILE)
        env_type = "local"
    elif env == "global":
        config_path = os.path.join(os.environ.get("USERPROFILE", ""), ".envman", CONFIG_FILE)
        env_type = "global"
    else:
        _error(f"Unknown environment: {env}. Use 'local' or 'global'.")
        return 1
    try:
        config = load_env_config(config_path)
    except (OSError, ValueError) as exc:
        _error(f"Could not load {env_type} environment: {exc}")
        return 1
    try:
        save_env_config(CONFIG_FILE, config)
    except OSError as exc:
        _error(f"Failed to switch environment: {exc}")
        return 1
    print(f"Switched to {env_type} environment.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="envman",
        description=f"Portable SDK environment manager. {long_description()}",
    )
    root_option = argparse.ArgumentParser(add_help=False)
    root_option.add_argument(
        "--sdk-root",
        default="",
        help="Path to SDKs root folder (default: next to envman)",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    activate = commands.add_parser(
        "activate", parents=[root_option],
        help="Set up environment and generate activation scripts",
    )
    activate.set_defaults(handler=_cmd_activate)

    deactivate = commands.add_parser(
        "deactivate", help="Revert environment variables to previous state (manual step)",
    )
    deactivate.set_defaults(handler=_cmd_deactivate)

    init = commands.add_parser(
        "init", parents=[root_option],
        help="Initialize a new environment in the current folder (dynamic, YAML DSL)",
    )
    init.set_defaults(handler=_cmd_init)

    list_parser = commands.add_parser(
        "list", parents=[root_option], help="List available SDKs and versions",
    )
    list_parser.set_defaults(handler=_cmd_list)

    select = commands.add_parser(
        "select", parents=[root_option],
        help="Interactively select SDKs for the environment (dynamic)",
    )
    select.set_defaults(handler=_cmd_select)

    use = commands.add_parser("use", help="Switch between local/global environments")
    use.add_argument("env", nargs="?", default=None, help="'local' or 'global'")
    use.set_defaults(handler=_cmd_use)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())