import logging
from typing import List, Tuple

from lan_simulation.errors import TopologyError
from lan_simulation.network import Network
from lan_simulation.node import NodeKind
from lan_simulation.report_format import DEFAULT_FORMAT, ReportFormat

_logger = logging.getLogger(__name__)


class NetworkBuilder:
    """Collects ring members in order and produces a closed, ready-to-use `Network`.

    Nodes are placed on the ring in the order they are added; the first one
    becomes the entry node and every workstation is registered. Topology is
    fixed once `build()` returns.
    """

    def __init__(self, size: int, report_format: ReportFormat = DEFAULT_FORMAT):
        self.size = size
        self.report_format = report_format
        self._members: List[Tuple[NodeKind, str]] = []

    def add(self, kind: NodeKind, name: str) -> "NetworkBuilder":
        if any(existing == name for _, existing in self._members):
            raise TopologyError(f"duplicate node name '{name}'")
        self._members.append((kind, name))
        return self

    def workstation(self, name: str) -> "NetworkBuilder":
        return self.add(NodeKind.WORKSTATION, name)

    def printer(self, name: str) -> "NetworkBuilder":
        return self.add(NodeKind.PRINTER, name)

    def node(self, name: str) -> "NetworkBuilder":
        return self.add(NodeKind.NODE, name)

    def __len__(self) -> int:
        return len(self._members)

    def build(self, strict: bool = True) -> Network:
        """Create the network and close the ring.

        With `strict`, an inconsistent result (no workstation, no printer,
        no members) raises `TopologyError` instead of being returned.
        """
        network = Network(self.size, report_format=self.report_format)
        for kind, name in self._members:
            network.create_node(kind, name)
            if kind == NodeKind.WORKSTATION:
                network.register_workstation(name)

        names = [name for _, name in self._members]
        for i, name in enumerate(names):
            network.link(name, names[(i + 1) % len(names)])
        if names:
            network.set_entry(names[0])

        if strict and not network.is_consistent():
            raise TopologyError(
                f"ring {names} is not a consistent network (needs at least one workstation and one printer)")

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(f"Ring built: {' -> '.join(names)}")
        return network
