from __future__ import annotations

from typing import Any, Dict, List

from lan_simulation.builder import NetworkBuilder
from lan_simulation.network import Network
from lan_simulation.node import NodeKind, parse_node_kind
from lan_simulation.report_format import DEFAULT_FORMAT, ReportFormat


def _require_dict(d: Any, path: str) -> Dict[str, Any]:
    if not isinstance(d, dict):
        raise ValueError(f"Expected mapping at '{path}', got {type(d).__name__}")
    return d


def create_ring(topology: Dict[str, Any], *, report_format: ReportFormat = DEFAULT_FORMAT) -> Network:
    """Build a ring from a topology mapping.

    Example (YAML)::

        topology:
          type: ring
          size: 2
          nodes:
            - {name: Filip, kind: workstation}
            - {name: n1, kind: node}
            - {name: Andy, kind: printer}

    ``type: default`` builds the reference example and ignores ``nodes``.
    Nodes are linked in list order and the last one points back to the first.
    """
    topology = _require_dict(topology, "topology")
    topo_type = str(topology.get("type", "ring")).lower()
    if topo_type == "default":
        return Network.default_example(report_format=report_format)
    if topo_type != "ring":
        raise ValueError(f"Unknown topology type '{topo_type}'. Valid: default | ring")

    nodes: List[Any] = topology.get("nodes") or []
    if not isinstance(nodes, list) or not nodes:
        raise ValueError("Expected a non-empty list at 'topology.nodes'")

    kinds = []
    for i, raw in enumerate(nodes):
        entry = _require_dict(raw, f"topology.nodes[{i}]")
        if "name" not in entry:
            raise ValueError(f"Missing 'name' at 'topology.nodes[{i}]'")
        kinds.append((parse_node_kind(entry.get("kind", "node")), str(entry["name"])))

    size = int(topology.get("size", max(1, sum(1 for kind, _ in kinds if kind == NodeKind.WORKSTATION))))
    builder = NetworkBuilder(size, report_format=report_format)
    for kind, name in kinds:
        builder.add(kind, name)
    return builder.build(strict=True)
