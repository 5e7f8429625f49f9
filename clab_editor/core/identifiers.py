# clab_editor/core/identifiers.py

"""
Collision-free identifier allocation for topology elements.

None of the functions here mutate the ``used_ids`` collection they are given.
A caller creating several elements must add each returned identifier to its
set before asking for the next one (``allocate_many`` does exactly that).
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from clab_editor.utils.constants import (
    DEFAULT_INTERFACE_PATTERN,
    SPECIAL_ENDPOINT_PREFIXES,
    SPECIAL_NETWORK_TYPES,
    TEMPLATE_NODE_PREFIX,
)
from clab_editor.utils.exceptions import UnknownNetworkTypeError

logger = logging.getLogger(__name__)

DUMMY_RE = re.compile(r"^dummy(\d*)\Z", re.ASCII)
ADAPTER_RE = re.compile(r"^([A-Za-z]+)(\d+)\Z", re.ASCII)
TRAILING_DIGITS_RE = re.compile(r"^(.*?)(\d*)\Z", re.ASCII | re.DOTALL)
# prefix, optional {n:start} or {n:start-end}, suffix
INTERFACE_PATTERN_RE = re.compile(
    r"^(.+)?\{n(?::(\d+)(?:-(\d+))?)?\}(.+)?\Z", re.ASCII | re.DOTALL
)

# id layout of each network type, the counter goes in {n}
NETWORK_ID_FORMATS = {
    "host": "host:eth{n}",
    "mgmt-net": "mgmt-net:net{n}",
    "macvlan": "macvlan:{n}",
    "vxlan": "vxlan:vxlan{n}",
    "vxlan-stitch": "vxlan-stitch:vxlan{n}",
    "dummy": "dummy{n}",
    "bridge": "bridge{n}",
    "ovs-bridge": "ovs-bridge{n}",
}


class IdCategory(str, Enum):
    DUMMY = "dummy"
    ADAPTER = "adapter"
    SPECIAL = "special"
    REGULAR = "regular"


def _is_number(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _split_trailing_digits(name: str) -> tuple[str, str]:
    root, digits = TRAILING_DIGITS_RE.match(name).groups()
    return root, digits


def is_special_endpoint(name: str) -> bool:
    """
    Check whether a name denotes a special (network) endpoint.

    Parameters
    ----------
    name : str
        A node identifier or base name.

    Returns
    -------
    bool
        True for the bare network types (``host``, ``macvlan``, ...), their
        prefixed forms (``host:eth1``, ``vxlan:vxlan0``, ``dummy3``) and a
        network type followed by digits only (``bridge2``).
    """
    if name in SPECIAL_NETWORK_TYPES:
        return True
    if name.startswith(SPECIAL_ENDPOINT_PREFIXES):
        return True
    root, digits = _split_trailing_digits(name)
    return bool(digits) and root in SPECIAL_NETWORK_TYPES


def classify(base_name: str) -> IdCategory:
    """
    Classify a base name into the allocation strategy used for it.

    Parameters
    ----------
    base_name : str
        The requested name, e.g. ``srl1``, ``dummy``, ``host:eth1``.

    Returns
    -------
    IdCategory
        ``DUMMY``, ``ADAPTER`` or ``SPECIAL`` for special endpoints,
        ``REGULAR`` for everything else.
    """
    if not is_special_endpoint(base_name):
        return IdCategory.REGULAR
    if DUMMY_RE.match(base_name):
        return IdCategory.DUMMY
    if ":" in base_name:
        return IdCategory.ADAPTER
    return IdCategory.SPECIAL


def _next_dummy(base_name: str, used_ids) -> str:
    digits = DUMMY_RE.match(base_name).group(1)
    n = int(digits) if digits else 1
    while f"dummy{n}" in used_ids:
        n += 1
    return f"dummy{n}"


def _next_adapter(base_name: str, used_ids) -> str:
    node_type, _, adapter = base_name.partition(":")
    match = ADAPTER_RE.match(adapter)
    if match:
        prefix, n = match.group(1), int(match.group(2))
        while True:
            n += 1
            candidate = f"{node_type}:{prefix}{n}"
            if candidate not in used_ids:
                return candidate

    counter = 1
    candidate = f"{node_type}:{adapter}{counter}"
    while candidate in used_ids:
        counter += 1
        candidate = f"{node_type}:{adapter}{counter}"
    return candidate


def _next_special(base_name: str, used_ids) -> str:
    root, digits = _split_trailing_digits(base_name)
    n = int(digits) if digits else 0
    while True:
        n += 1
        candidate = f"{root}{n}"
        if candidate not in used_ids:
            return candidate


def _next_regular(base_name: str, used_ids) -> str:
    root, _ = _split_trailing_digits(base_name)
    highest = 0
    for used in used_ids:
        if not used.startswith(root):
            continue
        suffix = used[len(root):]
        if _is_number(suffix):
            highest = max(highest, int(suffix))
    return f"{root}{highest + 1}"


_STRATEGIES = {
    IdCategory.DUMMY: _next_dummy,
    IdCategory.ADAPTER: _next_adapter,
    IdCategory.SPECIAL: _next_special,
    IdCategory.REGULAR: _next_regular,
}


def generate(base_name: str, used_ids: Iterable[str]) -> str:
    """
    Produce a fresh identifier derived from ``base_name``.

    Regular nodes take the highest numeric suffix in use for the same root
    plus one, so ``srl1`` with ``{srl1, srl2, srl4}`` in use yields ``srl5``;
    gaps are never refilled. Special endpoints increment their own numeric
    part until they hit a free name.

    Parameters
    ----------
    base_name : str
        The requested or default name.
    used_ids : Iterable[str]
        Identifiers already present in the document. Not modified.

    Returns
    -------
    str
        An identifier not contained in ``used_ids``.
    """
    if not isinstance(used_ids, (set, frozenset, dict)):
        used_ids = set(used_ids)
    category = classify(base_name)
    new_id = _STRATEGIES[category](base_name, used_ids)
    logger.debug(f"Allocated '{new_id}' for '{base_name}' ({category.value})")
    return new_id


def allocate_many(base_names: Iterable[str], used_ids: Iterable[str]) -> list[str]:
    """
    Allocate one identifier per base name, in order, without collisions
    between the results. The caller's ``used_ids`` is left untouched.
    """
    taken = set(used_ids)
    allocated = []
    for base_name in base_names:
        new_id = generate(base_name, taken)
        taken.add(new_id)
        allocated.append(new_id)
    return allocated


def generate_template_node_id(used_ids: Iterable[str]) -> str:
    """Return ``nodeId-<n>`` one above the highest template node id in use."""
    highest = 0
    for used in used_ids:
        if not used.startswith(TEMPLATE_NODE_PREFIX):
            continue
        suffix = used[len(TEMPLATE_NODE_PREFIX):]
        if _is_number(suffix):
            highest = max(highest, int(suffix))
    return f"{TEMPLATE_NODE_PREFIX}{highest + 1}"


def _network_id_regex(network_type: str) -> re.Pattern:
    prefix, _, suffix = NETWORK_ID_FORMATS[network_type].partition("{n}")
    return re.compile(f"^{re.escape(prefix)}(\\d+){re.escape(suffix)}\\Z", re.ASCII)


def generate_network_id(network_type: str, used_ids: Iterable[str]) -> str:
    """
    Produce the next identifier for a network node of the given type.

    Parameters
    ----------
    network_type : str
        One of ``host``, ``mgmt-net``, ``macvlan``, ``vxlan``,
        ``vxlan-stitch``, ``dummy``, ``bridge`` or ``ovs-bridge``.
    used_ids : Iterable[str]
        Identifiers already present in the document.

    Returns
    -------
    str
        For example ``host:eth0`` for the first host endpoint, then
        ``host:eth1`` and so on.

    Raises
    ------
    UnknownNetworkTypeError
        If ``network_type`` is not a known network type.
    """
    if network_type not in NETWORK_ID_FORMATS:
        raise UnknownNetworkTypeError(f"Unknown network type '{network_type}'")

    used_ids = set(used_ids)
    pattern = _network_id_regex(network_type)
    counter = 0
    for used in used_ids:
        match = pattern.match(used)
        if match:
            counter = max(counter, int(match.group(1)) + 1)

    id_format = NETWORK_ID_FORMATS[network_type]
    candidate = id_format.format(n=counter)
    while candidate in used_ids:
        counter += 1
        candidate = id_format.format(n=counter)
    return candidate


@dataclass
class InterfacePattern:
    """
    One interface naming pattern such as ``e1-{n}`` or ``ethernet-1/{n:1-34}``.

    Indices count from ``start``: index 0 renders as ``start``. ``end`` is
    the last number the pattern may hand out, if the pattern is bounded.
    """

    prefix: str
    suffix: str = ""
    start: int = 1
    end: int | None = None
    used: set[int] = field(default_factory=set)

    def render(self, index: int) -> str:
        return f"{self.prefix}{self.start + index}{self.suffix}"

    def index_of(self, endpoint: str) -> int | None:
        regex = f"{re.escape(self.prefix)}(\\d+){re.escape(self.suffix)}"
        match = re.fullmatch(regex, endpoint, re.ASCII)
        if not match:
            return None
        index = int(match.group(1)) - self.start
        return index if index >= 0 else None

    def next_index(self, bounded: bool = True) -> int | None:
        index = 0
        while index in self.used:
            index += 1
        if bounded and self.end is not None and index > self.end - self.start:
            return None
        return index


def split_interface_patterns(pattern_list: str) -> list[str]:
    """Split a comma-separated pattern list, ignoring commas inside braces."""
    patterns = []
    current = ""
    depth = 0
    for char in pattern_list:
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(0, depth - 1)
        elif char == "," and depth == 0:
            if current.strip():
                patterns.append(current.strip())
            current = ""
            continue
        current += char
    if current.strip():
        patterns.append(current.strip())
    return patterns


def parse_interface_pattern(pattern: str) -> InterfacePattern:
    """
    Parse a single interface pattern.

    ``{n}`` numbers from 1, ``{n:0}`` from 0 and ``{n:1-34}`` from 1 to 34.
    Text without a placeholder is used as a prefix (``ens`` gives ``ens1``),
    and an empty pattern falls back to ``eth``. An end below the start is
    ignored.
    """
    pattern = pattern.strip()
    match = INTERFACE_PATTERN_RE.match(pattern)
    if not match:
        return InterfacePattern(prefix=pattern or "eth")

    prefix, start, end, suffix = match.groups()
    start = int(start) if start else 1
    end = int(end) if end else None
    if end is not None and end < start:
        end = None
    return InterfacePattern(prefix=prefix or "", suffix=suffix or "", start=start, end=end)


def parse_interface_patterns(pattern_list: str) -> list[InterfacePattern]:
    patterns = [parse_interface_pattern(p) for p in split_interface_patterns(pattern_list)]
    return patterns or [parse_interface_pattern(DEFAULT_INTERFACE_PATTERN)]


def next_interface(
    used_endpoints: Iterable[str], pattern: str = DEFAULT_INTERFACE_PATTERN
) -> str:
    """
    Return the lowest free interface name for a node.

    Parameters
    ----------
    used_endpoints : Iterable[str]
        Interface names already used by the node's links.
    pattern : str
        Interface naming pattern, or a comma-separated list of them, e.g.
        ``e1-{n}``, ``eth{n:0}`` or ``e1-{n:1-32},e2-{n}``.

    Returns
    -------
    str
        The first pattern with a free number in its range, rendered with the
        lowest free number. Gaps are filled, unlike node names. When every
        range is full, the last pattern carries on past its end.
    """
    patterns = parse_interface_patterns(pattern)
    for endpoint in used_endpoints:
        if not isinstance(endpoint, str) or not endpoint:
            continue
        # an endpoint counts against the first pattern it fits
        for parsed in patterns:
            index = parsed.index_of(endpoint)
            if index is not None:
                parsed.used.add(index)
                break

    for parsed in patterns:
        index = parsed.next_index()
        if index is not None:
            return parsed.render(index)

    overflow = patterns[-1]
    return overflow.render(overflow.next_index(bounded=False))
