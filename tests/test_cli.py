import io
import json
import sys

import pytest

from envman.cli import build_parser, default_sdk_root, list_toolchains, long_description, main


def _make_sdks(root, layout):
    for lang, versions in layout.items():
        for version in versions:
            (root / lang / version).mkdir(parents=True)


def _make_toolchains(project, names, content="name: x\nsteps: []\n"):
    folder = project / "toolchains"
    folder.mkdir(exist_ok=True)
    for name in names:
        (folder / f"envman_{name}.yaml").write_text(content, encoding="utf-8")
    return folder


@pytest.fixture
def project(tmp_path, monkeypatch):
    directory = tmp_path / "project"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return directory


def test_list_toolchains_filters_and_sorts(tmp_path):
    (tmp_path / "envman_java.yaml").write_text("", encoding="utf-8")
    (tmp_path / "envman_go.yaml").write_text("", encoding="utf-8")
    (tmp_path / "other.yaml").write_text("", encoding="utf-8")
    (tmp_path / "envman_node.yml").write_text("", encoding="utf-8")
    (tmp_path / "envman_dir.yaml").mkdir()
    assert list_toolchains(tmp_path) == ["go", "java"]


def test_list_toolchains_missing_directory(tmp_path):
    with pytest.raises(OSError):
        list_toolchains(tmp_path / "missing")


def test_long_description_without_toolchains(tmp_path):
    assert long_description(tmp_path / "missing") == "Manage and activate portable SDK environments."


def test_long_description_with_toolchains(tmp_path):
    (tmp_path / "envman_go.yaml").write_text("", encoding="utf-8")
    (tmp_path / "envman_java.yaml").write_text("", encoding="utf-8")
    assert long_description(tmp_path) == "Manage and activate portable SDK environments for: go, java."


def test_default_sdk_root_name():
    assert default_sdk_root().replace("\\", "/").endswith("envman_sdks")


def test_parser_use_accepts_optional_env():
    args = build_parser().parse_args(["use", "global"])
    assert args.env == "global"
    assert build_parser().parse_args(["use"]).env is None


def test_no_command_prints_help(project, capsys):
    assert main([]) == 0
    assert "envman" in capsys.readouterr().out


def test_list_prints_versions(tmp_path, project, capsys):
    sdks = tmp_path / "sdks"
    _make_sdks(sdks, {"go": ["1.21", "1.22"], "java": ["17"]})
    assert main(["list", "--sdk-root", str(sdks)]) == 0
    assert capsys.readouterr().out.splitlines() == ["go:", "  1.21", "  1.22", "java:", "  17"]


def test_list_empty_root(tmp_path, project, capsys):
    sdks = tmp_path / "sdks"
    sdks.mkdir()
    assert main(["list", "--sdk-root", str(sdks)]) == 1
    assert "No SDKs found in the specified sdkRoot." in capsys.readouterr().err


def test_list_missing_root(tmp_path, project, capsys):
    assert main(["list", "--sdk-root", str(tmp_path / "nowhere")]) == 1
    assert "Error discovering SDKs" in capsys.readouterr().err


def test_deactivate_explains(project, capsys):
    assert main(["deactivate"]) == 0
    assert "close your shell" in capsys.readouterr().err


def test_use_unknown_environment(project, capsys):
    assert main(["use", "staging"]) == 1
    assert "Unknown environment: staging" in capsys.readouterr().err


def test_use_local_missing_config(project, capsys):
    assert main(["use"]) == 1
    assert "Could not load local environment" in capsys.readouterr().err


def test_use_global_copies_config(tmp_path, project, monkeypatch, capsys):
    home = tmp_path / "home"
    (home / ".envman").mkdir(parents=True)
    (home / ".envman" / "envman.json").write_text(json.dumps({"go": "1.22"}), encoding="utf-8")
    monkeypatch.setenv("USERPROFILE", str(home))
    assert main(["use", "global"]) == 0
    assert json.loads((project / "envman.json").read_text(encoding="utf-8")) == {"go": "1.22"}
    assert "Switched to global environment." in capsys.readouterr().out


def test_activate_without_config(project, capsys):
    assert main(["activate"]) == 1
    assert "envman.json not found or invalid" in capsys.readouterr().err


def test_activate_writes_scripts_for_known_toolchains(tmp_path, project, capsys):
    _make_toolchains(project, ["go"])
    (project / "envman.json").write_text(json.dumps({"go": "1.22", "rust": "1.0"}), encoding="utf-8")
    sdks = tmp_path / "sdks"
    assert main(["activate", "--sdk-root", str(sdks)]) == 0
    bat = (project / "activate.bat").read_text(encoding="utf-8")
    ps1 = (project / "activate.ps1").read_text(encoding="utf-8")
    assert bat.startswith("@echo off\n")
    assert "set go_HOME=" in bat
    assert "rust" not in bat
    assert "$env:go_HOME = '" in ps1
    assert "rust" not in ps1
    assert "Activation scripts generated" in capsys.readouterr().out


def test_activate_without_toolchains_folder(project, capsys):
    (project / "envman.json").write_text(json.dumps({"go": "1.22"}), encoding="utf-8")
    assert main(["activate"]) == 1
    assert "Failed to read toolchains folder" in capsys.readouterr().err


def test_select_records_choices(tmp_path, project, monkeypatch, capsys):
    _make_toolchains(project, ["go", "java", "zig"])
    sdks = tmp_path / "sdks"
    _make_sdks(sdks, {"go": ["1.21", "1.22"], "java": ["11", "17"]})
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\n\n"))
    assert main(["select", "--sdk-root", str(sdks)]) == 0
    saved = json.loads((project / "envman.json").read_text(encoding="utf-8"))
    assert saved == {"go": "1.21", "java": "17"}
    captured = capsys.readouterr()
    assert "Warning: No zig SDKs found." in captured.err
    assert "Updated envman.json with selected SDK versions." in captured.out


def test_select_out_of_range_keeps_default(tmp_path, project, monkeypatch):
    _make_toolchains(project, ["go"])
    sdks = tmp_path / "sdks"
    _make_sdks(sdks, {"go": ["1.21", "1.22"]})
    monkeypatch.setattr(sys, "stdin", io.StringIO("9\n"))
    assert main(["select", "--sdk-root", str(sdks)]) == 0
    assert json.loads((project / "envman.json").read_text(encoding="utf-8")) == {"go": "1.22"}


def test_init_existing_config(project, capsys):
    (project / "envman.json").write_text("{}", encoding="utf-8")
    assert main(["init"]) == 0
    assert "envman.json already exists in this folder." in capsys.readouterr().out


def test_init_runs_steps_and_copies_templates(tmp_path, project, monkeypatch, capsys):
    toolchain = (
        "name: go\n"
        "steps:\n"
        "  - type: message\n"
        "    text: \"Setting up {cwd_basename}\"\n"
        "  - type: file\n"
        "    path: main.txt\n"
        "    content: \"version {version}\"\n"
    )
    _make_toolchains(project, ["go"], toolchain)
    sdks = tmp_path / "sdks"
    _make_sdks(sdks, {"go": ["1.21", "1.22"]})
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "README.md").write_text("readme", encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\n"))

    assert main(["init", "--sdk-root", str(sdks)]) == 0

    assert json.loads((project / "envman.json").read_text(encoding="utf-8")) == {"go": "1.22"}
    assert (project / "main.txt").read_text(encoding="utf-8") == "version 1.22"
    assert (project / "README.md").read_text(encoding="utf-8") == "readme"
    assert not (project / ".gitignore").exists()
    out = capsys.readouterr().out
    assert "Setting up project" in out
    assert "Initialized new go environment with version 1.22." in out


def test_init_without_sdks_for_toolchain(tmp_path, project, monkeypatch, capsys):
    _make_toolchains(project, ["go"])
    sdks = tmp_path / "sdks"
    _make_sdks(sdks, {"java": ["17"]})
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n"))
    assert main(["init", "--sdk-root", str(sdks)]) == 0
    assert "No SDKs found for go in" in capsys.readouterr().out
    assert not (project / "envman.json").exists()