"""Running counters for the requests handled by one network."""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class RequestStatistics:
    broadcasts: int = 0
    print_requests: int = 0
    print_delivered: int = 0
    print_failed: int = 0
    destinations_not_found: int = 0
    accounting_failures: int = 0

    # hop statistics over every request
    hop_count: int = 0
    max_hops: int = 0

    def record_hops(self, hops: int) -> None:
        self.hop_count += hops
        if hops > self.max_hops:
            self.max_hops = hops

    def record_broadcast(self, hops: int) -> None:
        self.broadcasts += 1
        self.record_hops(hops)

    def record_print(self, hops: int, delivered: bool, found: bool) -> None:
        self.print_requests += 1
        self.record_hops(hops)
        if delivered:
            self.print_delivered += 1
        else:
            self.print_failed += 1
        if not found:
            self.destinations_not_found += 1

    def record_accounting_failure(self) -> None:
        self.accounting_failures += 1

    @property
    def requests(self) -> int:
        return self.broadcasts + self.print_requests

    @property
    def avg_hops(self) -> float:
        """Average hops per request."""
        return self.hop_count / self.requests if self.requests > 0 else 0.0

    def summary(self) -> Dict[str, Any]:
        result = asdict(self)
        result["avg_hops"] = self.avg_hops
        return result
