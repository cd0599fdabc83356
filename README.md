# envman

A portable SDK environment manager. It finds SDKs laid out on disk by
language and version, records your choices in a small `envman.json` file
in the project folder, and writes activation scripts for CMD and
PowerShell.

## Installation

```
pip install .
```

This installs the `envman` command.

## SDK layout

SDKs live under an SDK root folder. By default this is `envman_sdks` in
the folder of the running program; the `--sdk-root` option of `init`,
`select`, `list` and `activate` names another one.

```
envman_sdks/
  go/
    1.21.0/
    1.22.1/
  node/
    20.11.0/
```

Each top-level folder is a language and each folder inside it is a
version. Versions are ordered by folder name, and the last one is the
default. Languages with no version folders are ignored.

## Toolchain definitions

The `toolchains` folder in the working directory holds one
`envman_<name>.yaml` file per toolchain; the toolchain names are listed in
alphabetical order. Each file has a `name`, a list of `steps` and optional
`env_vars`. A step has a `type`:

- `prompt`: print `message` with `default`, read an answer and store it
  in `var` (the default is used for an empty answer)
- `select`: print `message` and the numbered `options`, read a number and
  store the chosen option in `var` (anything out of range picks the first)
- `run`: run `command` with `args`; a failing or missing command stops
  `envman init`
- `file`: write `content` to `path` (write errors are ignored)
- `message`: print `text`

Steps of any other type are skipped. Any text may use `{variable}`
placeholders. The variables `version`, `cwd_basename` and `sdk_root` are
always set, and `prompt` and `select` steps add more.

A step with a `when` condition runs only if it holds. The condition has
the form `left == right`: after substitution, whitespace is trimmed from
the left side, and whitespace and double quotes from the right side, and
the two are compared. For example:

```yaml
- type: message
  text: "Creating a {kind} project"
  when: '{kind} == "app"'
```

## Commands

```
envman init [--sdk-root PATH]     # pick a toolchain, run its steps, write envman.json
envman select [--sdk-root PATH]   # choose a version for every toolchain
envman list [--sdk-root PATH]     # show discovered SDKs and versions
envman activate [--sdk-root PATH] # write activate.bat and activate.ps1
envman use [local|global]         # copy a local or global envman.json into place
envman deactivate                 # explain how to leave the environment
```

`envman init` does nothing if `envman.json` already exists. It uses the
newest version of the chosen toolchain and, after writing `envman.json`,
copies `.gitignore` and `README.md` from `<sdk-root>/../templates` when
they exist and are not already present.

`envman use global` reads `%USERPROFILE%\.envman\envman.json`.

After `envman activate`, run `activate.bat` in CMD or `. ./activate.ps1`
in PowerShell. Each sets `<lang>_HOME` and puts the SDK's `bin` folder
first on `PATH`, for every toolchain in `toolchains` that has a version
in `envman.json`.

## Library use

The modules can be used on their own:

- `envman.config`: `load_env_config`, `save_env_config`
- `envman.sdk`: `discover_sdks`, `SDKInfo`
- `envman.scripts`: `generate_activate_bat`, `generate_activate_ps1`
- `envman.toolchain`: `load_toolchain_config`, `run_toolchain_steps`,
  `substitute`, `eval_condition`, `Step`, `ToolchainConfig`
- `envman.templates`: `copy_template`
- `envman.structs`: `struct_to_map`
- `envman.cli`: `main`, `build_parser`, `list_toolchains`,
  `default_sdk_root`, `long_description`

## Limitations

- `envman deactivate` only prints advice; no deactivation script is
  written, so the previous `PATH` must be restored by hand or by closing
  the shell.
- The `env_vars` of a toolchain file are read but not used by any command.
- SDKs are not downloaded or installed; they must already be on disk.

## Running the tests

```
pip install ".[test]"
pytest
```