from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, TYPE_CHECKING

from lan_simulation.report import ReportSink, write_best_effort

if TYPE_CHECKING:
    from lan_simulation.network import Network


class Request(ABC):
    """One request issued against a built network."""

    @abstractmethod
    def run(self, network: Network, report: ReportSink) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class BroadcastRequest(Request):

    def run(self, network: Network, report: ReportSink) -> bool:
        return network.broadcast(report)

    def __str__(self) -> str:
        return "broadcast"


@dataclass(frozen=True)
class PrintRequest(Request):
    workstation: str
    document: str
    printer: str

    def run(self, network: Network, report: ReportSink) -> bool:
        return network.print_document(self.workstation, self.document, self.printer, report)

    def __str__(self) -> str:
        return f"print {self.workstation} -> {self.printer}"


class Scenario(ABC):
    """A sequence of requests.

    A Scenario must not create or link nodes. It only issues requests against
    a network produced by a builder.
    """

    name: str

    @abstractmethod
    def requests(self) -> List[tuple[str, Request]]:
        """Return (title, request) pairs in the order they are issued."""
        raise NotImplementedError

    def run(self, network: Network, report: ReportSink) -> List[bool]:
        results: List[bool] = []
        for title, request in self.requests():
            if title:
                write_best_effort(report, f"\n\n{'-' * 33}SCENARIO: {title} {'-' * 17}\n")
            results.append(request.run(network, report))
        return results

    def parameters_summary(self) -> Dict[str, Any]:
        return {"scenario": getattr(self, "name", self.__class__.__name__)}
