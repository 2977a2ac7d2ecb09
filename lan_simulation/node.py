from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from lan_simulation.report import ReportSink, write_best_effort

if TYPE_CHECKING:
    from lan_simulation.network import Network
    from lan_simulation.packet import Packet

_logger = logging.getLogger(__name__)


class NodeKind(Enum):
    NODE = 1
    WORKSTATION = 2
    PRINTER = 3


class Node:
    """A single station on the token ring.

    The successor is stored as a name (`next_name`) which the owning
    `Network` resolves; nodes never hold references to each other.
    """

    kind: NodeKind = NodeKind.NODE
    label: str = "Node"
    xml_tag: str = "node"

    def __init__(self, name: str, next_name: str | None = None):
        if not name:
            raise ValueError("node name must be a non-empty string")
        self.name = name
        self.next_name = next_name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, next={self.next_name!r})"

    @property
    def is_workstation(self) -> bool:
        return self.kind == NodeKind.WORKSTATION

    @property
    def is_printer(self) -> bool:
        return self.kind == NodeKind.PRINTER

    # --- rendering ---

    def render_text(self) -> str:
        return f"{self.label} {self.name} [{self.label}]"

    def render_html(self) -> str:
        return f"{self.label} {self.name} [{self.label}]"

    def render_xml(self) -> str:
        return f"<{self.xml_tag}>{self.name}</{self.xml_tag}>"

    # --- behaviour on the ring ---

    def log_action(self, report: ReportSink, action: str, network: Network) -> None:
        """Write one hop line for this node; sink failures are swallowed."""
        line = network.report_format.hop_line.format(name=self.name, action=action, label=self.label)
        write_best_effort(report, line)

    def attempt_print(self, packet: Packet, report: ReportSink, network: Network) -> bool:
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(f"Print rejected     node={self.name} kind={self.kind.name} origin={packet.origin}")
        write_best_effort(report, network.report_format.not_a_printer)
        return False


class Workstation(Node):
    """A node that may originate requests; the only kind kept in the registry."""

    kind = NodeKind.WORKSTATION
    label = "Workstation"
    xml_tag = "workstation"


class Printer(Node):

    kind = NodeKind.PRINTER
    label = "Printer"
    xml_tag = "printer"

    def attempt_print(self, packet: Packet, report: ReportSink, network: Network) -> bool:
        fmt = network.report_format
        document = packet.payload
        if fmt.is_postscript(document):
            title = fmt.postscript_title(document)
            self._account(network, report, fmt.postscript_author(document), title, fmt.postscript_delivered)
        else:
            title = fmt.ascii_title
            write_best_effort(report, fmt.document_line.format(name=self.name, document=document))
            if fmt.account_ascii_jobs:
                self._account(network, report, fmt.ascii_author(document), title, fmt.ascii_delivered)
            else:
                write_best_effort(report, fmt.ascii_delivered)

        _logger.info(f"Print job delivered printer={self.name} origin={packet.origin} title={title!r}")
        return True

    def _account(self, network: Network, report: ReportSink, author: str, title: str, status: str) -> None:
        # a failing sink never turns a delivered job into a failure
        try:
            network.record_accounting(report, author, title, status)
        except (OSError, ValueError) as exc:
            network.stats.record_accounting_failure()
            _logger.warning(f"Accounting entry lost on printer {self.name}: {exc!r}")


NODE_CLASSES: dict[NodeKind, type[Node]] = {
    NodeKind.NODE: Node,
    NodeKind.WORKSTATION: Workstation,
    NodeKind.PRINTER: Printer,
}


def parse_node_kind(raw: str) -> NodeKind:
    """Parse a kind name from configuration ('node' | 'workstation' | 'printer')."""
    if not isinstance(raw, str):
        raise ValueError(f"Expected node kind string, got {type(raw).__name__}")
    v = raw.strip().lower()
    if v in {"node", "n"}:
        return NodeKind.NODE
    if v in {"workstation", "ws"}:
        return NodeKind.WORKSTATION
    if v in {"printer", "pr"}:
        return NodeKind.PRINTER
    raise ValueError(f"Invalid node kind {raw!r}. Valid: node | workstation | printer")


def create_node(kind: NodeKind, name: str) -> Node:
    return NODE_CLASSES[kind](name)
