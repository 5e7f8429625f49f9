# clab_editor/core/resolver.py

"""
Effective node configuration and inheritance detection.

A node's effective configuration is the shallow merge of, in increasing
precedence, ``topology.defaults``, ``topology.kinds[kind]``,
``topology.groups[group]`` and the node's own properties. Only values that
``should_persist`` take part in the merge.
"""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from clab_editor.core.equality import UNSET, deep_equal
from clab_editor.models.node_config import NodeConfig
from clab_editor.models.topology import TopologyConfig
from clab_editor.utils.constants import NEVER_INHERITED

logger = logging.getLogger(__name__)


@dataclass
class NodeEditState:
    """Result of merging a node with its topology layers."""

    effective: dict
    inherited: list[str] = field(default_factory=list)
    persisted: dict = field(default_factory=dict)


def should_persist(value) -> bool:
    """
    Tell whether a value counts as meaningfully set.

    ``UNSET``, empty lists and empty mappings do not; everything else does,
    including ``0``, ``False``, ``""`` and ``None``.
    """
    if value is UNSET:
        return False
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, Mapping):
        return len(value) > 0
    return True


def _as_topology(topology) -> TopologyConfig:
    if isinstance(topology, TopologyConfig):
        return topology
    return TopologyConfig.from_dict(topology)


def _as_props(node_props) -> dict:
    if isinstance(node_props, NodeConfig):
        return node_props.to_dict()
    if isinstance(node_props, Mapping):
        return dict(node_props)
    return {}


def _apply_layer(merged: dict, layer: Mapping) -> None:
    for key, value in layer.items():
        if should_persist(value):
            merged[key] = copy.deepcopy(value)


def _kind_name(topology: TopologyConfig, kind, group):
    if isinstance(kind, str):
        return kind
    group_kind = topology.group_config(group).get("kind")
    if isinstance(group_kind, str):
        return group_kind
    return topology.defaults.get("kind")


def baseline(topology, kind=None, group=None) -> dict:
    """
    Merge the topology layers a node would inherit, without the node itself.

    The ``kinds`` entry is picked by ``kind``, or when that is not given by
    the kind of the group, then by ``defaults.kind``, the way containerlab
    resolves it.

    Parameters
    ----------
    topology : TopologyConfig or Mapping
        Layered configuration; a mapping with ``defaults``/``kinds``/``groups``
        is accepted as well.
    kind : str, optional
        The node's own kind.
    group : str, optional
        Node group selecting a ``groups`` entry.

    Returns
    -------
    dict
        The inherited configuration.
    """
    topology = _as_topology(topology)
    merged: dict = {}
    _apply_layer(merged, topology.defaults)
    _apply_layer(merged, topology.kind_config(_kind_name(topology, kind, group)))
    _apply_layer(merged, topology.group_config(group))
    return merged


def resolve(topology, node_props) -> dict:
    """
    Compute a node's effective configuration.

    Parameters
    ----------
    topology : TopologyConfig or Mapping
        Layered configuration of the topology.
    node_props : Mapping or NodeConfig
        The node's explicit properties, including ``kind`` and ``group``.

    Returns
    -------
    dict
        A new mapping; neither input is modified.
    """
    props = _as_props(node_props)
    merged = baseline(topology, props.get("kind"), props.get("group"))
    _apply_layer(merged, props)
    return merged


def compute_inherited(effective, explicit, inherited_base) -> list[str]:
    """
    List the effective properties whose value comes from a topology layer.

    A property is inherited when the layers provide a meaningful value and
    the node either sets nothing meaningful for it or sets an equal value.
    ``kind``, ``name`` and ``group`` are never reported.

    Parameters
    ----------
    effective : Mapping
        Output of ``resolve``.
    explicit : Mapping or NodeConfig
        The node's own properties.
    inherited_base : Mapping
        Output of ``baseline`` for the same kind and group.

    Returns
    -------
    list[str]
        Property names in the key order of ``effective``.
    """
    explicit = _as_props(explicit)
    inherited = []
    for key in effective:
        if key in NEVER_INHERITED:
            continue
        value = explicit.get(key, UNSET)
        base_value = inherited_base.get(key, UNSET)
        if not should_persist(base_value):
            continue
        if not should_persist(value) or deep_equal(value, base_value):
            inherited.append(key)
    return inherited


def persisted_props(explicit, inherited_base) -> dict:
    """
    Select the node properties worth writing back to the topology file.

    Values that are not meaningful or that equal what the node inherits
    anyway are dropped. ``kind``, ``name`` and ``group`` are kept whenever
    they are set.
    """
    explicit = _as_props(explicit)
    persisted = {}
    for key, value in explicit.items():
        if not should_persist(value):
            continue
        if key in NEVER_INHERITED or not deep_equal(
            value, inherited_base.get(key, UNSET)
        ):
            persisted[key] = copy.deepcopy(value)
        else:
            logger.debug(f"Dropping '{key}', equal to the inherited value")
    return persisted


def merge_node_data(topology, node_props, kind=None, group=None) -> NodeEditState:
    """
    Resolve a node for the editor in one pass.

    Parameters
    ----------
    topology : TopologyConfig or Mapping
        Layered configuration of the topology.
    node_props : Mapping or NodeConfig
        Values entered in (or previously saved from) the node editor.
    kind : str, optional
        Overrides the ``kind`` found in ``node_props``.
    group : str, optional
        Overrides the ``group`` found in ``node_props``.

    Returns
    -------
    NodeEditState
        Effective configuration, inherited property names and the record to
        persist.
    """
    props = _as_props(node_props)
    if kind is not None:
        props["kind"] = kind
    if group is not None:
        props["group"] = group

    inherited_base = baseline(topology, props.get("kind"), props.get("group"))
    effective = resolve(topology, props)
    state = NodeEditState(
        effective=effective,
        inherited=compute_inherited(effective, props, inherited_base),
        persisted=persisted_props(props, inherited_base),
    )
    logger.debug(
        f"Resolved node kind={props.get('kind')} group={props.get('group')}: "
        f"{len(state.effective)} props, inherited={state.inherited}"
    )
    return state
