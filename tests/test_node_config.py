"""Tests for the typed node record."""
from clab_editor.core.equality import UNSET
from clab_editor.models.node_config import NodeConfig


def test_known_keys_become_attributes():
    """Dashed record keys map to attributes."""
    node = NodeConfig.from_dict(
        {"kind": "linux", "startup-config": "cfg.txt", "image-pull-policy": "always"}
    )
    assert node.kind == "linux"
    assert node.startup_config == "cfg.txt"
    assert node.image_pull_policy == "always"
    assert node.memory is UNSET
    assert node.extensions == {}


def test_unknown_keys_kept_as_extensions():
    """Vendor properties survive in extensions."""
    node = NodeConfig.from_dict({"kind": "nokia_sros", "license": "lic", "x-vendor": {"a": 1}})
    assert node.license == "lic"
    assert node.extensions == {"x-vendor": {"a": 1}}


def test_round_trip():
    """from_dict/to_dict preserve the record, nulls included."""
    data = {
        "kind": "linux",
        "env": {"A": "1"},
        "binds": ["a:/a"],
        "cpu": 0,
        "auto-remove": False,
        "user": None,
        "x-vendor": [1, 2],
    }
    assert NodeConfig.from_dict(data).to_dict() == data


def test_get_by_record_key():
    """get() looks up known and extension keys by record key."""
    node = NodeConfig.from_dict({"cpu-set": "0-1", "x-vendor": 3})
    assert node.get("cpu-set") == "0-1"
    assert node.get("x-vendor") == 3
    assert node.get("memory") is UNSET
    assert node.get("memory", "1Gb") == "1Gb"


def test_from_none():
    """A missing record gives an empty config."""
    assert NodeConfig.from_dict(None).to_dict() == {}
