# clab_editor/services/element_factory.py

import logging

from clab_editor.core import identifiers
from clab_editor.models.topology import EditorContext

logger = logging.getLogger(__name__)


class ElementFactory:
    """
    Creates identifiers for new topology elements and registers them in the
    context, so consecutive calls never hand out the same name.

    Parameters
    ----------
    context : EditorContext
        The open topology; ``context.used_ids`` is updated on every call.
    """

    def __init__(self, context: EditorContext):
        self.context = context

    def _register(self, new_id: str) -> str:
        self.context.used_ids.add(new_id)
        return new_id

    def create_node(self, base_name: str | None = None, kind: str | None = None) -> str:
        """
        Allocate a node name.

        Parameters
        ----------
        base_name : str, optional
            Requested name. Defaults to the base name of ``kind`` (or of the
            context's default kind), e.g. ``srl`` for SR Linux.
        kind : str, optional
            Kind of the node, used only when ``base_name`` is not given.

        Returns
        -------
        str
            The new, registered identifier.
        """
        base_name = base_name or self.context.base_name_for(kind)
        new_id = identifiers.generate(base_name, self.context.used_ids)
        logger.info(f"Creating node '{new_id}'")
        return self._register(new_id)

    def create_template_node(self) -> str:
        """Allocate a ``nodeId-N`` identifier for a palette template node."""
        return self._register(identifiers.generate_template_node_id(self.context.used_ids))

    def create_network(self, network_type: str) -> str:
        """
        Allocate a network endpoint id such as ``host:eth0`` or ``bridge1``.

        Raises
        ------
        UnknownNetworkTypeError
            If ``network_type`` is not a containerlab network type.
        """
        new_id = identifiers.generate_network_id(network_type, self.context.used_ids)
        logger.info(f"Creating {network_type} network '{new_id}'")
        return self._register(new_id)

    def paste(self, names) -> dict[str, str]:
        """
        Allocate ids for copied elements.

        Parameters
        ----------
        names : Iterable[str]
            Identifiers of the copied elements, in paste order.

        Returns
        -------
        dict
            Mapping of each copied id to its new id.
        """
        names = list(names)
        new_ids = identifiers.allocate_many(names, self.context.used_ids)
        for new_id in new_ids:
            self._register(new_id)
        return dict(zip(names, new_ids))

    def next_interface(self, node_name: str, used_endpoints, kind: str | None = None) -> str:
        """
        Return the next free interface name on a node for a new link.

        Special endpoints such as ``host:eth1`` or ``bridge0`` carry no
        interfaces of their own and get an empty string.

        Parameters
        ----------
        node_name : str
            The node getting a new link.
        used_endpoints : Iterable[str]
            Interface names already in use on that node.
        kind : str, optional
            Node kind, selects the interface naming pattern. Defaults to the
            kind stored for the node, then the context's default kind. A
            pattern set for the node itself takes priority over the kind's.
        """
        if identifiers.is_special_endpoint(node_name):
            return ""

        kind = kind or self.context.nodes.get(node_name, {}).get("kind") or self.context.default_kind
        pattern = self.context.interface_pattern_for(kind, node_name)
        endpoint = identifiers.next_interface(used_endpoints, pattern)
        logger.debug(f"Next interface on '{node_name}' ({kind}): {endpoint}")
        return endpoint
