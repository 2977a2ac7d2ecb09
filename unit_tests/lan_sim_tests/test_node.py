import io
import unittest
from unittest import mock

from lan_simulation.network import Network
from lan_simulation.node import Node, NodeKind, Printer, Workstation, create_node, parse_node_kind
from lan_simulation.packet import Packet
from lan_simulation.report_format import ReportFormat


class FailingSink:
    def write(self, text):
        raise OSError("disk full")

    def flush(self):
        raise OSError("disk full")


class TestNodeKinds(unittest.TestCase):

    def test_basic_node(self):
        node = Node("n")
        self.assertEqual(node.name, "n")
        self.assertIsNone(node.next_name)
        node.next_name = "n"
        self.assertEqual(node.next_name, "n")

    def test_empty_name_is_rejected(self):
        with self.assertRaises(ValueError):
            Node("")

    def test_capability_flags(self):
        self.assertFalse(Node("n").is_workstation)
        self.assertFalse(Node("n").is_printer)
        self.assertTrue(Workstation("w").is_workstation)
        self.assertFalse(Workstation("w").is_printer)
        self.assertTrue(Printer("p").is_printer)
        self.assertFalse(Printer("p").is_workstation)

    def test_render_text_and_html(self):
        self.assertEqual(Node("n1").render_text(), "Node n1 [Node]")
        self.assertEqual(Workstation("Filip").render_text(), "Workstation Filip [Workstation]")
        self.assertEqual(Printer("Andy").render_html(), "Printer Andy [Printer]")

    def test_render_xml(self):
        self.assertEqual(Node("n1").render_xml(), "<node>n1</node>")
        self.assertEqual(Workstation("Filip").render_xml(), "<workstation>Filip</workstation>")
        self.assertEqual(Printer("Andy").render_xml(), "<printer>Andy</printer>")

    def test_create_node_and_parse_kind(self):
        self.assertIsInstance(create_node(NodeKind.PRINTER, "p"), Printer)
        self.assertIsInstance(create_node(NodeKind.WORKSTATION, "w"), Workstation)
        self.assertEqual(parse_node_kind(" Workstation "), NodeKind.WORKSTATION)
        self.assertEqual(parse_node_kind("pr"), NodeKind.PRINTER)
        with self.assertRaises(ValueError):
            parse_node_kind("router")
        with self.assertRaises(ValueError):
            parse_node_kind(3)


def test_log_action_writes_hop_line():
    network = Network.default_example()
    report = io.StringIO()
    network.node("n1").log_action(report, "passes packet on", network)
    assert report.getvalue() == "\tNode 'n1' passes packet on.\n"


def test_log_action_swallows_sink_errors():
    network = Network.default_example()
    # must not raise
    network.node("Filip").log_action(FailingSink(), "passes packet on", network)

    closed = io.StringIO()
    closed.close()
    network.node("Filip").log_action(closed, "passes packet on", network)


def test_non_printers_refuse_to_print():
    network = Network.default_example()
    packet = Packet("Hello World", "Filip", "Hans")
    for name in ("Hans", "n1"):
        report = io.StringIO()
        assert network.node(name).attempt_print(packet, report, network) is False
        assert report.getvalue() == ">>> Destination is not a printer, print job cancelled.\n\n"


def test_printer_prints_ascii_document_without_accounting():
    network = Network.default_example()
    report = io.StringIO()
    packet = Packet("Hello World", "Filip", "Andy")
    with mock.patch.object(Network, "record_accounting", autospec=True) as record:
        assert network.node("Andy").attempt_print(packet, report, network) is True
    assert record.call_count == 0
    assert report.getvalue() == (
        "\tPrinter 'Andy' prints 'Hello World'.\n"
        ">>> ASCII Print job delivered.\n\n"
    )


def test_printer_accounts_ascii_document_when_enabled():
    network = Network.default_example(report_format=ReportFormat(account_ascii_jobs=True))
    report = io.StringIO()
    packet = Packet("Hello World", "Filip", "Andy")
    assert network.node("Andy").attempt_print(packet, report, network) is True
    assert report.getvalue() == (
        "\tPrinter 'Andy' prints 'Hello World'.\n"
        "\tAccounting -- author = 'Unknown' -- title = 'ASCII DOCUMENT'\n"
        ">>> ASCII Print job delivered.\n\n"
    )


def test_printer_takes_ascii_author_from_long_document():
    network = Network.default_example(report_format=ReportFormat(account_ascii_jobs=True))
    report = io.StringIO()
    packet = Packet("Dear sirBartDuBo, the rest", "Filip", "Andy")
    assert network.node("Andy").attempt_print(packet, report, network) is True
    assert "author = 'BartDuBo'" in report.getvalue()


def test_printer_parses_postscript_fields():
    network = Network.default_example()
    report = io.StringIO()
    packet = Packet("!PS author:Serge Demeyer. title:Refactoring. body", "Filip", "Andy")
    assert network.node("Andy").attempt_print(packet, report, network) is True
    assert report.getvalue() == (
        "\tAccounting -- author = 'Serge Demeyer' -- title = 'Refactoring'\n"
        ">>> Postscript job delivered.\n\n"
    )


def test_printer_succeeds_when_accounting_write_fails():
    network = Network.default_example()
    packet = Packet("!PS Hello World", "Filip", "Andy")
    assert network.node("Andy").attempt_print(packet, FailingSink(), network) is True
    assert network.stats.accounting_failures == 1


def test_printer_ascii_job_ignores_failing_report():
    network = Network.default_example()
    packet = Packet("Hello World", "Filip", "Andy")
    assert network.node("Andy").attempt_print(packet, FailingSink(), network) is True
    assert network.stats.accounting_failures == 0
