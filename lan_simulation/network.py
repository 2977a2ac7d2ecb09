import io
import logging
from typing import Dict, Iterator, List, Optional

from lan_simulation.errors import InconsistentNetworkError, PreconditionError, TopologyError, \
    UnknownWorkstationError
from lan_simulation.node import Node, NodeKind, create_node
from lan_simulation.packet import Packet
from lan_simulation.report import ReportSink, flush, write_best_effort
from lan_simulation.report_format import DEFAULT_FORMAT, ReportFormat
from lan_simulation.statistics import RequestStatistics

_logger = logging.getLogger(__name__)


class Network:
    """A token ring Local Area Network.

    Packets are passed from one node to its successor until they reach their
    destination or until they travelled the whole ring. The network owns every
    node (`entities`, keyed by name); successor links and the workstation
    registry are names resolved against that collection.
    """

    def __init__(self, size: int, report_format: ReportFormat = DEFAULT_FORMAT):
        """Create an empty (and therefore inconsistent) network.

        Parameters:
        size: expected number of workstations, used as a capacity hint
        report_format: line templates used for everything written to a report
        """
        if int(size) <= 0:
            raise ValueError(f"network size must be positive, got {size}")
        self.size = int(size)
        self.entities: Dict[str, Node] = {}
        self.workstations: Dict[str, Node] = {}
        self.entry_name: Optional[str] = None
        self.report_format = report_format
        self.stats = RequestStatistics()
        self._initialized = True

    @classmethod
    def default_example(cls, report_format: ReportFormat = DEFAULT_FORMAT) -> "Network":
        """Workstation Filip -> Node n1 -> Workstation Hans -> Printer Andy -> back to Filip."""
        from lan_simulation.builder import NetworkBuilder

        return (NetworkBuilder(2, report_format=report_format)
                .workstation("Filip")
                .node("n1")
                .workstation("Hans")
                .printer("Andy")
                .build())

    # --- build steps (construction time only) ---

    def add_node(self, node: Node) -> Node:
        if node.name in self.entities:
            raise TopologyError(f"duplicate node name '{node.name}'")
        self.entities[node.name] = node
        return node

    def create_node(self, kind: NodeKind, name: str) -> Node:
        return self.add_node(create_node(kind, name))

    def register_workstation(self, name: str) -> None:
        """Add an owned node to the workstation registry.

        The node kind is validated by `is_consistent`, not here.
        """
        if name not in self.entities:
            raise TopologyError(f"cannot register unknown node '{name}'")
        self.workstations[name] = self.entities[name]

    def link(self, from_name: str, to_name: str) -> None:
        for name in (from_name, to_name):
            if name not in self.entities:
                raise TopologyError(f"cannot link unknown node '{name}'")
        self.entities[from_name].next_name = to_name

    def set_entry(self, name: str) -> None:
        if name not in self.entities:
            raise TopologyError(f"entry node '{name}' is not part of the network")
        self.entry_name = name

    # --- queries ---

    def is_initialized(self) -> bool:
        # False for instances that skipped __init__ (e.g. Network.__new__(Network))
        return getattr(self, "_initialized", False)

    def _require_initialized(self) -> None:
        if not self.is_initialized():
            raise PreconditionError("network is not initialized")

    def __len__(self) -> int:
        return len(self.entities)

    def node(self, name: str) -> Optional[Node]:
        return self.entities.get(name)

    @property
    def entry_node(self) -> Optional[Node]:
        if self.entry_name is None:
            return None
        return self.entities.get(self.entry_name)

    def has_workstation(self, name: str) -> bool:
        self._require_initialized()
        node = self.workstations.get(name)
        if node is None:
            return False
        return node.is_workstation

    def _successor(self, node: Node) -> Optional[Node]:
        if node.next_name is None:
            return None
        return self.entities.get(node.next_name)

    def _walk_ring(self) -> Iterator[Node]:
        """Yield nodes from the entry node onward, at most one revolution.

        Stops on the first revisit or on a missing successor, so it is safe on
        malformed rings.
        """
        current = self.entry_node
        seen: set[str] = set()
        while current is not None and current.name not in seen:
            seen.add(current.name)
            yield current
            current = self._successor(current)

    def nodes_in_ring_order(self) -> List[Node]:
        self._require_initialized()
        return list(self._walk_ring())

    def is_consistent(self) -> bool:
        """Answer whether this is a consistent token ring network.

        A consistent network has at least one registered workstation and an entry
        node, registers only workstations, is a single cycle through the entry
        node, contains at least one printer, and its registered workstations are
        exactly the workstations on the ring.
        """
        self._require_initialized()
        if not self.workstations:
            return False
        if self.entry_node is None:
            return False
        if any(not node.is_workstation for node in self.workstations.values()):
            return False

        entry = self.entry_node
        encountered: set[str] = set()
        ring_workstations: set[str] = set()
        printers_found = 0
        current: Optional[Node] = entry
        while current is not None and current.name not in encountered:
            encountered.add(current.name)
            if current.is_workstation:
                ring_workstations.add(current.name)
            if current.is_printer:
                printers_found += 1
            current = self._successor(current)

        if current is None or current.name != entry.name:
            # dangling link, or a branch back into the ring that skips the entry
            return False
        if printers_found == 0:
            return False
        return ring_workstations == set(self.workstations)

    def _require_consistent(self) -> None:
        if not self.is_consistent():
            raise InconsistentNetworkError("request issued on an inconsistent network")

    # --- requests ---

    def _send(self, report: ReportSink, node: Node, actions: List[str]) -> Node:
        """Log `actions` on `node` and hand the packet to its successor."""
        for action in actions:
            node.log_action(report, action, self)
        successor = self._successor(node)
        if successor is None:
            raise InconsistentNetworkError(f"node {node.name} has no successor on the ring")
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(f"Packet hop         from={node.name} to={successor.name}")
        return successor

    def broadcast(self, report: ReportSink) -> bool:
        """Send a broadcast packet around the whole ring, starting at the entry node.

        Every node logs that it accepts the packet and passes it on. Always
        succeeds on a consistent network.
        """
        self._require_consistent()
        fmt = self.report_format
        write_best_effort(report, fmt.broadcast_request)

        entry = self.entry_node
        packet = Packet.broadcast(entry.name)
        actions = [fmt.accepts_broadcast, fmt.passes_packet_on]
        current = entry
        hops = 0
        while True:
            current = self._send(report, current, actions)
            hops += 1
            if packet.is_at_destination(current):
                break

        write_best_effort(report, fmt.broadcast_done)
        self.stats.record_broadcast(hops)
        _logger.info(f"Broadcast completed entry={entry.name} hops={hops}")
        return True

    def print_document(self, workstation: str, document: str, printer: str, report: ReportSink) -> bool:
        """Route `document` from `workstation` towards the node named `printer`.

        The packet travels until it reaches `printer` or comes back to
        `workstation`. Routing is by name only; whether the reached node can
        actually print is decided by the node itself on delivery.

        Returns True when the document was printed.
        """
        self._require_consistent()
        if not self.has_workstation(workstation):
            raise UnknownWorkstationError(workstation)
        if not printer:
            raise PreconditionError("print request needs a non-empty destination name")

        fmt = self.report_format
        write_best_effort(report, fmt.print_request.format(workstation=workstation, document=document,
                                                           printer=printer))

        packet = Packet(document, workstation, printer)
        current = self.workstations[workstation]
        actions = [fmt.passes_packet_on]
        hops = 0
        while True:
            current = self._send(report, current, actions)
            hops += 1
            if packet.is_at_destination(current) or packet.is_at_origin(current):
                break

        if packet.is_at_destination(current):
            result = packet.deliver(current, report, self)
            self.stats.record_print(hops, delivered=result, found=True)
        else:
            write_best_effort(report, fmt.destination_not_found)
            result = False
            self.stats.record_print(hops, delivered=False, found=False)
            _logger.info(f"Print job cancelled, destination not found origin={workstation} dst={printer}")
        return result

    def record_accounting(self, report: ReportSink, author: str, title: str, status: str) -> None:
        """Append an accounting entry. Sink failures propagate to the caller."""
        report.write(self.report_format.accounting_line.format(author=author, title=title))
        report.write(status)
        flush(report)

    # --- rendering ---

    def render_text(self, buf: ReportSink) -> None:
        self._require_initialized()
        for node in self._walk_ring():
            buf.write(node.render_text())
            buf.write(" -> ")
        buf.write(" ... ")

    def render_html(self, buf: ReportSink) -> None:
        self._require_initialized()
        buf.write("<HTML>\n<HEAD>\n<TITLE>LAN Simulation</TITLE>\n</HEAD>\n<BODY>\n<H1>LAN SIMULATION</H1>")
        buf.write("\n\n<UL>")
        for node in self._walk_ring():
            buf.write("\n\t<LI> ")
            buf.write(node.render_html())
            buf.write(" </LI>")
        buf.write("\n\t<LI>...</LI>\n</UL>\n\n</BODY>\n</HTML>\n")

    def render_xml(self, buf: ReportSink) -> None:
        self._require_initialized()
        buf.write("<?xml version=\"1.0\" encoding=\"UTF-8\"?>\n\n<network>")
        for node in self._walk_ring():
            buf.write("\n\t")
            buf.write(node.render_xml())
        buf.write("\n</network>")

    def to_text(self) -> str:
        buf = io.StringIO()
        self.render_text(buf)
        return buf.getvalue()

    def to_html(self) -> str:
        buf = io.StringIO()
        self.render_html(buf)
        return buf.getvalue()

    def to_xml(self) -> str:
        buf = io.StringIO()
        self.render_xml(buf)
        return buf.getvalue()

    def __str__(self) -> str:
        return self.to_text()

    def get_topology_summary(self) -> Dict[str, int]:
        ring = self.nodes_in_ring_order()
        return {
            'nodes count': len(self.entities),
            'ring length': len(ring),
            'workstations count': len(self.workstations),
            'printers count': len([n for n in ring if n.is_printer]),
        }
