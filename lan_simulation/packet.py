from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lan_simulation.node import Node
from lan_simulation.report import ReportSink

if TYPE_CHECKING:
    from lan_simulation.network import Network

BROADCAST_PAYLOAD = "BROADCAST"


@dataclass(frozen=True)
class Packet:
    """Transient envelope for a single request. Never shared between requests."""
    payload: str
    origin: str
    destination: str

    def __post_init__(self):
        if not self.origin or not self.destination:
            raise ValueError(f"packet needs a non-empty origin and destination, got {self.origin!r} -> {self.destination!r}")

    def __str__(self) -> str:
        return f"{self.origin} -> {self.destination} ({len(self.payload)} chars)"

    @classmethod
    def broadcast(cls, entry_name: str) -> Packet:
        return cls(BROADCAST_PAYLOAD, entry_name, entry_name)

    def is_at_destination(self, node: Node) -> bool:
        return self.destination == node.name

    def is_at_origin(self, node: Node) -> bool:
        return self.origin == node.name

    def deliver(self, node: Node, report: ReportSink, network: Network) -> bool:
        # Capability is checked here, not while routing: the node decides.
        return node.attempt_print(self, report, network)
