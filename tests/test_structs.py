from dataclasses import dataclass, field

import pytest

from envman.structs import struct_to_map


@dataclass
class _Sample:
    name: str
    version: str
    count: int = 0
    _hidden: str = "x"
    tags: list = field(default_factory=list)


class _Plain:
    def __init__(self):
        self.path = "/opt/sdk"
        self.size = 10
        self._secret_field = "hidden"


def test_dataclass_keeps_public_strings_in_order():
    result = struct_to_map(_Sample(name="go", version="1.21", count=3))
    assert result == {"name": "go", "version": "1.21"}
    assert list(result) == ["name", "version"]


def test_plain_object_uses_instance_attributes():
    assert struct_to_map(_Plain()) == {"path": "/opt/sdk"}


def test_non_struct_raises_type_error():
    with pytest.raises(TypeError):
        struct_to_map(42)


def test_dataclass_class_itself_is_not_accepted_as_instance():
    result = struct_to_map(_Sample)
    assert "name" not in result