from __future__ import annotations

from typing import Any, Dict, List, Sequence

from lan_simulation.network import Network
from lan_simulation.scenario import BroadcastRequest, PrintRequest, Request, Scenario


def parse_request(raw: Any, *, path: str) -> Request:
    """Parse one configured request.

    Accepts ``{"broadcast": true}`` or
    ``{"print": {"workstation": ..., "document": ..., "printer": ...}}``.
    """
    if not isinstance(raw, dict) or len(raw) != 1:
        raise ValueError(f"Expected a single-key mapping at '{path}', got {raw!r}")
    (kind, body), = raw.items()
    if kind == "broadcast":
        if not body:
            raise ValueError(f"'{path}.broadcast' must be true")
        return BroadcastRequest()
    if kind == "print":
        if not isinstance(body, dict):
            raise ValueError(f"Expected mapping at '{path}.print', got {type(body).__name__}")
        missing = [k for k in ("workstation", "document", "printer") if k not in body]
        if missing:
            raise ValueError(f"Missing keys {missing} at '{path}.print'")
        return PrintRequest(str(body["workstation"]), str(body["document"]), str(body["printer"]))
    raise ValueError(f"Unknown request type '{kind}' at '{path}'. Valid: broadcast | print")


class RequestListScenario(Scenario):
    """Requests given explicitly, usually loaded from a YAML configuration."""

    name = "request-list"

    def __init__(self, requests: Sequence[Request]):
        self._requests = list(requests)

    @classmethod
    def from_config(cls, raw: Any, *, path: str = "requests") -> "RequestListScenario":
        if raw is None:
            return cls([])
        if not isinstance(raw, list):
            raise ValueError(f"Expected list at '{path}', got {type(raw).__name__}")
        return cls([parse_request(item, path=f"{path}[{i}]") for i, item in enumerate(raw)])

    @classmethod
    def for_network(cls, network: Network, document: str = "Hello World") -> "RequestListScenario":
        """A print job from the first workstation to the first printer on the ring, then a broadcast."""
        ring = network.nodes_in_ring_order()
        workstation = next(n.name for n in ring if n.name in network.workstations)
        printer = next(n.name for n in ring if n.is_printer)
        return cls([PrintRequest(workstation, document, printer), BroadcastRequest()])

    def requests(self) -> List[tuple[str, Request]]:
        return [(str(request), request) for request in self._requests]

    def parameters_summary(self) -> Dict[str, Any]:
        out = super().parameters_summary()
        out["requests count"] = len(self._requests)
        return out
