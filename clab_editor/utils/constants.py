# clab_editor/utils/constants.py

SUBSTEP_INDENT = "    "

# Properties that are never reported as inherited
NEVER_INHERITED = ("kind", "name", "group")

# Network (special endpoint) node types, i.e. nodes that live outside the lab
SPECIAL_NETWORK_TYPES = (
    "host",
    "mgmt-net",
    "macvlan",
    "vxlan",
    "vxlan-stitch",
    "dummy",
    "bridge",
    "ovs-bridge",
)

# Prefixed forms of special endpoints as they appear in link endpoints
SPECIAL_ENDPOINT_PREFIXES = (
    "host:",
    "mgmt-net:",
    "macvlan:",
    "vxlan:",
    "vxlan-stitch:",
    "dummy",
)

TEMPLATE_NODE_PREFIX = "nodeId-"

DEFAULT_INTERFACE_PATTERN = "eth{n}"

DEFAULT_KIND = "nokia_srlinux"

# Interface naming per kind, kinds not listed use DEFAULT_INTERFACE_PATTERN
DEFAULT_INTERFACE_PATTERNS = {
    "nokia_srlinux": "e1-{n}",
    "arista_ceos": "eth{n}",
    "linux": "eth{n}",
}

# Base names offered for new nodes of a kind
DEFAULT_BASE_NAMES = {
    "nokia_srlinux": "srl",
    "nokia_sros": "sros",
    "nokia_srsim": "srsim",
    "arista_ceos": "ceos",
    "linux": "client",
}
