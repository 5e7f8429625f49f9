# clab_editor/services/node_editor.py

import logging

from clab_editor.core.resolver import NodeEditState, merge_node_data
from clab_editor.models.topology import EditorContext
from clab_editor.utils.constants import SUBSTEP_INDENT

logger = logging.getLogger(__name__)


class NodeEditorService:
    """
    Backs the node editor panel: computes what to show when a node is
    opened and what to write when it is saved.

    Parameters
    ----------
    context : EditorContext
        The open topology.
    """

    def __init__(self, context: EditorContext):
        self.context = context

    def _node_props(self, name, node_props):
        if node_props is not None:
            return node_props
        if name not in self.context.nodes:
            logger.warning(f"Node '{name}' is not part of the topology")
        return self.context.nodes.get(name, {})

    def open_node(self, name: str, node_props=None) -> NodeEditState:
        """
        Resolve a node for display.

        Parameters
        ----------
        name : str
            Node name.
        node_props : Mapping or NodeConfig, optional
            Values currently in the form. Defaults to the node record stored
            in the context.

        Returns
        -------
        NodeEditState
            Values to populate the form with and the properties to badge as
            inherited.
        """
        state = merge_node_data(self.context.topology, self._node_props(name, node_props))
        logger.debug(f"Opened '{name}', inherited: {state.inherited}")
        return state

    def save_node(self, name: str, node_props=None) -> dict:
        """
        Compute and store the record written back for a node.

        The pruned record replaces the node in ``context.nodes`` and the name
        is registered in ``context.used_ids``.

        Returns
        -------
        dict
            The node record without values it would inherit anyway.
        """
        props = self._node_props(name, node_props)
        state = merge_node_data(self.context.topology, props)
        if state.inherited:
            logger.info(
                f"{SUBSTEP_INDENT}Node '{name}' inherits {', '.join(state.inherited)}"
            )
        logger.debug(f"{SUBSTEP_INDENT}Node '{name}' persists {list(state.persisted)}")
        self.context.nodes[name] = state.persisted
        self.context.used_ids.add(name)
        return state.persisted
