import dataclasses
import io

import pytest

from lan_simulation.network import Network
from lan_simulation.node import Node, Printer, Workstation
from lan_simulation.packet import BROADCAST_PAYLOAD, Packet


def test_basic_packet():
    packet = Packet("c", "o", "a")
    assert packet.payload == "c"
    assert packet.origin == "o"
    assert packet.destination == "a"


def test_packet_is_immutable():
    packet = Packet("c", "o", "a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        packet.origin = "x"


def test_broadcast_packet_starts_and_ends_at_entry():
    packet = Packet.broadcast("Filip")
    assert packet.payload == BROADCAST_PAYLOAD
    assert packet.origin == packet.destination == "Filip"


def test_destination_and_origin_predicates_compare_names():
    packet = Packet("doc", "Filip", "Andy")
    assert packet.is_at_destination(Printer("Andy"))
    assert not packet.is_at_destination(Workstation("Filip"))
    assert packet.is_at_origin(Workstation("Filip"))
    # kind does not matter, only the name
    assert packet.is_at_origin(Node("Filip"))


def test_deliver_dispatches_on_node_kind():
    network = Network.default_example()
    packet = Packet("Hello World", "Filip", "Andy")
    assert packet.deliver(network.node("Andy"), io.StringIO(), network) is True
    assert packet.deliver(network.node("Hans"), io.StringIO(), network) is False
    assert packet.deliver(network.node("n1"), io.StringIO(), network) is False


@pytest.mark.parametrize("origin, destination", [("", "Andy"), ("Filip", ""), ("", "")])
def test_packet_needs_origin_and_destination(origin, destination):
    with pytest.raises(ValueError):
        Packet("doc", origin, destination)
