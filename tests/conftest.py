"""Shared fixtures."""
import pytest

from clab_editor.models.topology import TopologyConfig

TOPOLOGY_YAML = """
name: lab
topology:
  defaults:
    memory: 1Gb
    env:
      TZ: UTC
  kinds:
    nokia_srlinux:
      image: ghcr.io/nokia/srlinux:24.10
      type: ixrd3l
      memory: 2Gb
    linux:
      image: alpine:3
  groups:
    spines:
      memory: 3Gb
      labels:
        role: spine
  nodes:
    srl1:
      kind: nokia_srlinux
      group: spines
    srl2:
      kind: nokia_srlinux
      memory: 2Gb
    srl4:
      kind: nokia_srlinux
      memory: 4Gb
      binds: []
    client1:
      kind: linux
      image: alpine:3
      env:
        TZ: UTC
  links:
    - endpoints: ["srl1:e1-1", "srl2:e1-1"]
    - endpoints: ["client1:eth1", "host:eth1"]
    - endpoints: ["srl4:e1-1", "macvlan:enp0s3"]
"""


@pytest.fixture
def topology_file(tmp_path):
    """Write the sample topology to a temporary .clab.yml file."""
    path = tmp_path / "lab.clab.yml"
    path.write_text(TOPOLOGY_YAML)
    return path


@pytest.fixture
def layered_topology():
    """Topology config with one value per layer for the same property."""
    return TopologyConfig(
        defaults={"memory": "1Gb", "cpu": 1},
        kinds={"k": {"memory": "2Gb", "image": "img:1"}},
        groups={"g": {"memory": "3Gb", "labels": {"tier": "core"}}},
    )
