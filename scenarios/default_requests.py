from __future__ import annotations

from dataclasses import dataclass
from typing import List

from lan_simulation.scenario import BroadcastRequest, PrintRequest, Request, Scenario


@dataclass(frozen=True)
class DefaultRequestsScenario(Scenario):
    """The reference request mix for the default example ring.

    Success and failure print jobs from workstation Filip (unknown printer,
    printing on a workstation, printing on a plain node, postscript), then a
    broadcast.
    """

    name: str = "default-requests"
    workstation: str = "Filip"
    printer: str = "Andy"

    def requests(self) -> List[tuple[str, Request]]:
        ws = self.workstation
        return [
            ("Print Success", PrintRequest(ws, "Hello World", self.printer)),
            ("PrintFailure (UnknownPrinter)", PrintRequest(ws, "Hello World", "UnknownPrinter")),
            ("PrintFailure (print on Workstation)", PrintRequest(ws, "Hello World", "Hans")),
            ("PrintFailure (print on Node)", PrintRequest(ws, "Hello World", "n1")),
            ("Print Success Postscript", PrintRequest(ws, "!PS Hello World in postscript", self.printer)),
            ("Print Failure Postscript", PrintRequest(ws, "!PS Hello World in postscript", "Hans")),
            ("Broadcast Success", BroadcastRequest()),
        ]
