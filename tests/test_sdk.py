import os

import pytest

from envman.sdk import SDKInfo, discover_sdks


@pytest.fixture
def root(tmp_path):
    base = tmp_path / "sdks"
    for rel in ["go/1.21", "go/1.20", "node/20", "empty"]:
        (base / rel).mkdir(parents=True)
    (base / "go" / "notes.txt").write_text("x")
    (base / "README.md").write_text("x")
    return base


def test_discovers_languages_with_versions(root):
    sdks = discover_sdks(root)
    assert sorted(sdks) == ["go", "node"]


def test_versions_sorted_and_files_ignored(root):
    sdks = discover_sdks(root)
    assert [info.version for info in sdks["go"]] == ["1.20", "1.21"]


def test_info_fields(root):
    info = discover_sdks(str(root))["node"][0]
    assert info == SDKInfo(name="node", version="20", path=os.path.join(str(root), "node", "20"))
    assert os.path.isdir(info.path)


def test_empty_root_gives_empty_mapping(tmp_path):
    assert discover_sdks(tmp_path) == {}


def test_missing_root_raises(tmp_path):
    with pytest.raises(OSError):
        discover_sdks(tmp_path / "missing")