# clab_editor/models/node_config.py

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Union

from clab_editor.core.equality import UNSET

logger = logging.getLogger(__name__)

JsonValue = Union[str, int, float, bool, None, list, dict]


def _prop(key: str):
    return field(default=UNSET, metadata={"key": key})


@dataclass
class NodeConfig:
    """
    Typed containerlab node record.

    Known properties are attributes (``startup-config`` becomes
    ``startup_config``); anything else is kept in ``extensions`` so a record
    survives a round trip unchanged. Attributes left at ``UNSET`` are absent
    from the record, ``None`` is an explicit YAML null.
    """

    kind: Any = _prop("kind")
    type: Any = _prop("type")
    image: Any = _prop("image")
    group: Any = _prop("group")
    startup_config: Any = _prop("startup-config")
    enforce_startup_config: Any = _prop("enforce-startup-config")
    suppress_startup_config: Any = _prop("suppress-startup-config")
    license: Any = _prop("license")
    binds: Any = _prop("binds")
    env: Any = _prop("env")
    env_files: Any = _prop("env-files")
    labels: Any = _prop("labels")
    user: Any = _prop("user")
    entrypoint: Any = _prop("entrypoint")
    cmd: Any = _prop("cmd")
    exec: Any = _prop("exec")
    restart_policy: Any = _prop("restart-policy")
    auto_remove: Any = _prop("auto-remove")
    startup_delay: Any = _prop("startup-delay")
    mgmt_ipv4: Any = _prop("mgmt-ipv4")
    mgmt_ipv6: Any = _prop("mgmt-ipv6")
    network_mode: Any = _prop("network-mode")
    ports: Any = _prop("ports")
    dns: Any = _prop("dns")
    aliases: Any = _prop("aliases")
    memory: Any = _prop("memory")
    cpu: Any = _prop("cpu")
    cpu_set: Any = _prop("cpu-set")
    shm_size: Any = _prop("shm-size")
    cap_add: Any = _prop("cap-add")
    sysctls: Any = _prop("sysctls")
    devices: Any = _prop("devices")
    certificate: Any = _prop("certificate")
    healthcheck: Any = _prop("healthcheck")
    image_pull_policy: Any = _prop("image-pull-policy")
    runtime: Any = _prop("runtime")
    stages: Any = _prop("stages")
    components: Any = _prop("components")
    extensions: dict[str, JsonValue] = field(default_factory=dict)

    @classmethod
    def known_keys(cls) -> dict[str, str]:
        """Map record keys to attribute names."""
        return {f.metadata["key"]: f.name for f in fields(cls) if "key" in f.metadata}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "NodeConfig":
        """
        Build a NodeConfig from a raw node record.

        Parameters
        ----------
        data : Mapping or None
            The node mapping as parsed from the topology file.

        Returns
        -------
        NodeConfig
        """
        known = cls.known_keys()
        values = {}
        extensions = {}
        for key, value in (data or {}).items():
            if key in known:
                values[known[key]] = value
            else:
                extensions[key] = value
        if extensions:
            logger.debug(f"Keeping vendor properties {sorted(extensions)}")
        return cls(**values, extensions=extensions)

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain mapping, known keys first."""
        data = {}
        for f in fields(self):
            if "key" not in f.metadata:
                continue
            value = getattr(self, f.name)
            if value is not UNSET:
                data[f.metadata["key"]] = value
        data.update(self.extensions)
        return data

    def get(self, key: str, default=UNSET):
        """Look up a property by its record key."""
        attr = self.known_keys().get(key)
        if attr is not None:
            value = getattr(self, attr)
            return default if value is UNSET else value
        return self.extensions.get(key, default)
