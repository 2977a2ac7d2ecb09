"""Token ring LAN simulation.

Packets are forwarded hop by hop around a ring of workstations, printers and
plain nodes. See `lan_simulation.network.Network` for the request API.
"""
from lan_simulation.builder import NetworkBuilder
from lan_simulation.errors import InconsistentNetworkError, LanSimulationError, PreconditionError, TopologyError, \
    UnknownWorkstationError
from lan_simulation.network import Network
from lan_simulation.node import Node, NodeKind, Printer, Workstation
from lan_simulation.packet import Packet
from lan_simulation.report_format import DEFAULT_FORMAT, ReportFormat
from lan_simulation.statistics import RequestStatistics

__all__ = [
    "Network",
    "NetworkBuilder",
    "Node",
    "NodeKind",
    "Workstation",
    "Printer",
    "Packet",
    "ReportFormat",
    "DEFAULT_FORMAT",
    "RequestStatistics",
    "LanSimulationError",
    "PreconditionError",
    "InconsistentNetworkError",
    "UnknownWorkstationError",
    "TopologyError",
]
