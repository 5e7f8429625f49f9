"""Tests for topology loading and the editor context."""
import pytest

from clab_editor.models.topology import EditorContext, TopologyConfig, parse_topology_file
from clab_editor.utils.exceptions import ClabEditorError, TopologyFileError


class TestParseTopologyFile:
    """Tests for parse_topology_file()."""

    def test_layers_loaded(self, topology_file):
        """defaults, kinds and groups are read from the topology section."""
        topology, nodes, _ = parse_topology_file(str(topology_file))
        assert topology.defaults["memory"] == "1Gb"
        assert topology.kinds["nokia_srlinux"]["type"] == "ixrd3l"
        assert topology.groups["spines"]["labels"] == {"role": "spine"}
        assert set(nodes) == {"srl1", "srl2", "srl4", "client1"}

    def test_used_ids_include_special_endpoints(self, topology_file):
        """Special endpoints referenced by links count as used."""
        _, _, used_ids = parse_topology_file(str(topology_file))
        assert used_ids == {"srl1", "srl2", "srl4", "client1", "host:eth1", "macvlan:enp0s3"}

    def test_missing_file(self, tmp_path):
        """A missing file raises TopologyFileError."""
        with pytest.raises(TopologyFileError):
            parse_topology_file(str(tmp_path / "nope.clab.yml"))

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML raises TopologyFileError."""
        path = tmp_path / "bad.clab.yml"
        path.write_text("topology: [unclosed\n")
        with pytest.raises(TopologyFileError):
            parse_topology_file(str(path))

    def test_not_a_topology(self, tmp_path):
        """A YAML file without a topology section is rejected."""
        path = tmp_path / "other.yml"
        path.write_text("name: lab\n")
        with pytest.raises(ClabEditorError):
            parse_topology_file(str(path))

    def test_minimal_topology(self, tmp_path):
        """Sections other than topology are optional."""
        path = tmp_path / "min.clab.yml"
        path.write_text("topology:\n  nodes:\n    n1: {}\n")
        topology, nodes, used_ids = parse_topology_file(str(path))
        assert topology.defaults == {}
        assert topology.kinds == {}
        assert nodes == {"n1": {}}
        assert used_ids == {"n1"}

    def test_json_topology(self, tmp_path):
        """JSON files load through the same path."""
        path = tmp_path / "lab.json"
        path.write_text('{"topology": {"defaults": {"cpu": 2}, "nodes": {"a": {"kind": "linux"}}}}')
        topology, nodes, _ = parse_topology_file(str(path))
        assert topology.defaults == {"cpu": 2}
        assert nodes["a"] == {"kind": "linux"}


class TestEditorContext:
    """Tests for EditorContext."""

    def test_from_topology_file(self, topology_file):
        """The context carries topology, nodes and used ids."""
        context = EditorContext.from_topology_file(str(topology_file))
        assert context.file_path == str(topology_file)
        assert "host:eth1" in context.used_ids
        assert context.nodes["srl1"]["group"] == "spines"

    def test_defaults(self):
        """An empty context falls back to sensible defaults."""
        context = EditorContext()
        assert isinstance(context.topology, TopologyConfig)
        assert context.used_ids == set()
        assert context.interface_pattern_for("nokia_srlinux") == "e1-{n}"
        assert context.interface_pattern_for("unknown") == "eth{n}"
        assert context.base_name_for(None) == "srl"
        assert context.base_name_for("mystery") == "node"

    def test_used_ids_default_to_node_names(self):
        """Without explicit used ids the node names are used."""
        context = EditorContext(nodes={"a": {}, "b": {}})
        assert context.used_ids == {"a", "b"}

    def test_interface_patterns_override(self):
        """Custom patterns extend the built-in mapping."""
        context = EditorContext(interface_patterns={"nokia_srlinux": "ethernet-1/{n}"})
        assert context.interface_pattern_for("nokia_srlinux") == "ethernet-1/{n}"
        assert context.interface_pattern_for("linux") == "eth{n}"

    def test_node_interface_pattern_priority(self):
        """Node patterns beat the record key, which beats the kind pattern."""
        context = EditorContext(
            nodes={"r1": {"interfacePattern": "ens{n}"}, "r2": {"interfacePattern": ""}},
            node_interface_patterns={"r3": "ge-0/0/{n:0}"},
        )
        assert context.interface_pattern_for("linux", "r1") == "ens{n}"
        assert context.interface_pattern_for("nokia_srlinux", "r2") == "e1-{n}"
        assert context.interface_pattern_for("linux", "r3") == "ge-0/0/{n:0}"
        assert context.interface_pattern_for("linux", "missing") == "eth{n}"
