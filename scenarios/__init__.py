"""Request scenarios and ring builders.

Each scenario only issues requests on top of an already-built ring.
See `lan_simulation.scenario.Scenario`.
"""
from lan_simulation.scenario import Scenario
from .default_requests import DefaultRequestsScenario
from .request_list import RequestListScenario, parse_request
from .ring_creator import create_ring

__all__ = [
    "Scenario",
    "DefaultRequestsScenario",
    "RequestListScenario",
    "parse_request",
    "create_ring",
]
