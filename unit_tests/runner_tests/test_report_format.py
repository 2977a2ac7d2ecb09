import io

import pytest

from lan_simulation.builder import NetworkBuilder
from lan_simulation.report_format import DEFAULT_FORMAT, ReportFormat


def test_postscript_detection_uses_marker():
    assert DEFAULT_FORMAT.is_postscript("!PS Hello")
    assert not DEFAULT_FORMAT.is_postscript("Hello !PS")
    assert ReportFormat(postscript_marker="%!").is_postscript("%!PS-Adobe")


def test_field_extraction_defaults():
    assert DEFAULT_FORMAT.postscript_author("!PS no fields") == "Unknown"
    assert DEFAULT_FORMAT.postscript_title("!PS no fields") == "Untitled"
    assert DEFAULT_FORMAT.postscript_title("!PS title:Open ended") == "Open ended"
    assert DEFAULT_FORMAT.ascii_author("short") == "Unknown"


def test_with_overrides_converts_types_and_rejects_unknown_keys():
    fmt = ReportFormat.from_mapping({"postscript_marker": "%!", "ascii_author_start": "0"})
    assert fmt.postscript_marker == "%!"
    assert fmt.ascii_author_start == 0
    assert DEFAULT_FORMAT.postscript_marker == "!PS"
    with pytest.raises(ValueError):
        ReportFormat.from_mapping({"colour": "red"})


def test_custom_marker_changes_printer_accounting():
    fmt = ReportFormat(postscript_marker="%!")
    network = NetworkBuilder(1, report_format=fmt).workstation("w").printer("p").build()
    report = io.StringIO()
    assert network.print_document("w", "%! title:Manual.", "p", report)
    assert "title = 'Manual'" in report.getvalue()
    assert report.getvalue().endswith(">>> Postscript job delivered.\n\n")


def test_ascii_accounting_flag_override():
    assert DEFAULT_FORMAT.account_ascii_jobs is False
    assert ReportFormat.from_mapping({"account_ascii_jobs": "yes"}).account_ascii_jobs is True
    assert ReportFormat.from_mapping({"account_ascii_jobs": False}).account_ascii_jobs is False
    with pytest.raises(ValueError):
        ReportFormat.from_mapping({"account_ascii_jobs": "maybe"})
