"""Exceptions raised by the LAN simulation.

Routing and delivery failures are *not* exceptions: they are reported as a
``False`` request result plus a line in the report. The classes below cover
misuse of the API (preconditions) and broken construction steps.
"""


class LanSimulationError(Exception):
    pass


class PreconditionError(LanSimulationError, AssertionError):
    """A request was issued on a network that does not allow it."""


class InconsistentNetworkError(PreconditionError):
    pass


class UnknownWorkstationError(PreconditionError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a registered workstation")
        self.name = name


class TopologyError(LanSimulationError, ValueError):
    """Raised by build steps (duplicate names, links to unknown nodes, ...)."""
