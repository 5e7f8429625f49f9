# clab_editor/models/topology.py

import logging
import os
from collections.abc import Mapping

import yaml

from clab_editor.core.identifiers import is_special_endpoint
from clab_editor.utils.constants import (
    DEFAULT_BASE_NAMES,
    DEFAULT_INTERFACE_PATTERN,
    DEFAULT_INTERFACE_PATTERNS,
    DEFAULT_KIND,
)
from clab_editor.utils.exceptions import TopologyFileError
from clab_editor.utils.yaml_processor import YAMLProcessor

logger = logging.getLogger(__name__)


def _as_mapping(value) -> dict:
    return dict(value) if isinstance(value, Mapping) else {}


class TopologyConfig:
    """
    Layered node configuration of a containerlab topology.

    Parameters
    ----------
    defaults : dict
        Properties applied to every node (``topology.defaults``).
    kinds : dict
        Per-kind properties (``topology.kinds``).
    groups : dict
        Per-group properties (``topology.groups``).
    """

    def __init__(self, defaults=None, kinds=None, groups=None):
        self.defaults = _as_mapping(defaults)
        self.kinds = {
            name: _as_mapping(cfg) for name, cfg in _as_mapping(kinds).items()
        }
        self.groups = {
            name: _as_mapping(cfg) for name, cfg in _as_mapping(groups).items()
        }

    def __repr__(self):
        return (
            f"TopologyConfig(defaults={len(self.defaults)} props, "
            f"kinds={sorted(self.kinds)}, groups={sorted(self.groups)})"
        )

    @classmethod
    def from_dict(cls, data) -> "TopologyConfig":
        """
        Build a TopologyConfig from a ``topology`` section.

        Missing or malformed ``defaults``/``kinds``/``groups`` are empty.
        """
        data = _as_mapping(data)
        return cls(
            defaults=data.get("defaults"),
            kinds=data.get("kinds"),
            groups=data.get("groups"),
        )

    def kind_config(self, kind) -> dict:
        if not isinstance(kind, str):
            return {}
        return self.kinds.get(kind, {})

    def group_config(self, group) -> dict:
        if not isinstance(group, str):
            return {}
        return self.groups.get(group, {})


class EditorContext:
    """
    State the node editor works against, passed explicitly to services.

    Parameters
    ----------
    topology : TopologyConfig
        Layered defaults of the open topology.
    nodes : dict
        Raw node records keyed by node name.
    used_ids : set
        Identifiers currently present in the document. Services add the ids
        they allocate.
    default_kind : str
        Kind used for nodes created without an explicit kind.
    interface_patterns : dict
        Interface naming pattern per kind.
    node_interface_patterns : dict
        Interface naming pattern per node name, e.g. from the editor's
        annotations. Takes priority over the kind's pattern.
    file_path : str
        Path of the topology file, if loaded from disk.
    """

    def __init__(
        self,
        topology=None,
        nodes=None,
        used_ids=None,
        default_kind=DEFAULT_KIND,
        interface_patterns=None,
        node_interface_patterns=None,
        file_path="",
    ):
        self.topology = topology or TopologyConfig()
        self.nodes = dict(nodes or {})
        self.used_ids = set(used_ids) if used_ids is not None else set(self.nodes)
        self.default_kind = default_kind
        self.interface_patterns = dict(DEFAULT_INTERFACE_PATTERNS)
        self.interface_patterns.update(interface_patterns or {})
        self.node_interface_patterns = dict(node_interface_patterns or {})
        self.file_path = file_path

    def __repr__(self):
        return (
            f"EditorContext(file={self.file_path!r}, nodes={len(self.nodes)}, "
            f"used_ids={len(self.used_ids)}, default_kind={self.default_kind})"
        )

    def interface_pattern_for(self, kind, node_name=None) -> str:
        """
        Pick the interface pattern for a node.

        A pattern set for the node itself wins (``node_interface_patterns``,
        then an ``interfacePattern`` key on its record), then the pattern of
        ``kind``, then ``eth{n}``.
        """
        own = self.node_interface_patterns.get(node_name) or self.nodes.get(
            node_name, {}
        ).get("interfacePattern")
        if isinstance(own, str) and own:
            return own
        return self.interface_patterns.get(kind, DEFAULT_INTERFACE_PATTERN)

    def base_name_for(self, kind) -> str:
        return DEFAULT_BASE_NAMES.get(kind or self.default_kind, "node")

    @classmethod
    def from_topology_file(cls, path: str, **kwargs) -> "EditorContext":
        """
        Load a containerlab topology file into a fresh context.

        Parameters
        ----------
        path : str
            Path to a ``.clab.yml`` (or JSON) topology file.
        **kwargs
            Extra ``EditorContext`` arguments such as ``default_kind``.

        Returns
        -------
        EditorContext
        """
        topology, nodes, used_ids = parse_topology_file(path)
        return cls(
            topology=topology,
            nodes=nodes,
            used_ids=used_ids,
            file_path=str(path),
            **kwargs,
        )


def _load_topology_data(path: str) -> dict:
    if not os.path.isfile(path):
        logger.critical(f"Topology file '{path}' does not exist!")
        raise TopologyFileError(f"Topology file '{path}' does not exist!")

    try:
        with open(path) as f:
            data = YAMLProcessor().load_yaml(f.read())
    except yaml.YAMLError as e:
        logger.critical(f"File '{path}' is not valid YAML.")
        raise TopologyFileError(f"File '{path}' is not valid YAML.") from e
    except OSError as e:
        logger.critical(f"Failed to read topology file '{path}': {e}")
        raise TopologyFileError(f"Failed to read topology file '{path}': {e}") from e

    if not isinstance(data, Mapping) or not isinstance(data.get("topology"), Mapping):
        raise TopologyFileError(
            f"File '{path}' is not a containerlab topology (missing 'topology')"
        )
    return data


def _collect_link_endpoint_ids(links) -> set[str]:
    ids = set()
    for link in links if isinstance(links, list) else []:
        endpoints = link.get("endpoints") if isinstance(link, Mapping) else None
        if not isinstance(endpoints, list):
            continue
        for endpoint in endpoints:
            if isinstance(endpoint, str) and is_special_endpoint(endpoint):
                ids.add(endpoint)
    return ids


def parse_topology_file(path: str) -> tuple[TopologyConfig, dict, set[str]]:
    """
    Parse a containerlab topology file.

    Parameters
    ----------
    path : str
        Path to the topology file.

    Returns
    -------
    tuple
        ``(TopologyConfig, nodes, used_ids)`` where ``nodes`` maps node names
        to their raw records and ``used_ids`` holds node names plus the
        special endpoints referenced by links.

    Raises
    ------
    TopologyFileError
        If the file does not exist, cannot be read or is not a topology.
    """
    logger.info(f"Parsing topology file '{path}'")
    data = _load_topology_data(str(path))
    section = data["topology"]

    nodes = {
        str(name): _as_mapping(record)
        for name, record in _as_mapping(section.get("nodes")).items()
    }
    used_ids = set(nodes) | _collect_link_endpoint_ids(section.get("links"))
    topology = TopologyConfig.from_dict(section)
    logger.debug(f"Loaded {topology} with {len(nodes)} nodes")
    return topology, nodes, used_ids
