import io
import logging

import pytest
import yaml

import lan_network_simulation
import main as lan_main
from log_setup import configure_run_logging, ensure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_main_print_and_broadcast():
    out = io.StringIO()
    assert lan_main.main(["-print", "Filip", "Hello World", "Andy", "-broadcast"], out=out) == 0
    assert ">>> ASCII Print job delivered." in out.getvalue()
    assert ">>> Broadcast travelled whole token ring." in out.getvalue()


def test_main_failed_request_sets_exit_code():
    out = io.StringIO()
    assert lan_main.main(["-print", "Filip", "Hello World", "Hans"], out=out) == 1
    assert lan_main.main(["-print", "Andy", "Hello World", "Andy"], out=out) == 2


def test_main_render_xml():
    out = io.StringIO()
    assert lan_main.main(["-render", "xml"], out=out) == 0
    assert "<printer>Andy</printer>" in out.getvalue()


def test_yaml_runner(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.chdir(tmp_path)
    # keep pytest's own capture handlers in place
    monkeypatch.setattr(lan_network_simulation, "configure_run_logging",
                        lambda tag, **kw: configure_run_logging(tag, **{**kw, "force": False}))
    report_file = tmp_path / "report.txt"
    config = {
        "run": {"file_debug": True, "report_file": str(report_file)},
        "report": {"passes_packet_on": "hands over the packet"},
        "topology": {
            "type": "ring",
            "nodes": [
                {"name": "Filip", "kind": "workstation"},
                {"name": "Andy", "kind": "printer"},
            ],
        },
        "requests": [
            {"print": {"workstation": "Filip", "document": "!PS author:Bart. Hello", "printer": "Andy"}},
            {"broadcast": True},
        ],
    }
    path = tmp_path / "ring.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")

    assert lan_network_simulation.main([str(path)]) == 0

    report = report_file.read_text(encoding="utf-8")
    assert "\tNode 'Filip' hands over the packet.\n" in report
    assert "author = 'Bart'" in report
    logs = list((tmp_path / "results" / "logs").glob("ring_*.log"))
    assert len(logs) == 1


def test_yaml_runner_defaults_to_reference_requests():
    results = lan_network_simulation.run({}, io.StringIO())
    assert results['outcomes'] == [True, False, False, False, True, False, True]
    assert results['run statistics']['print_delivered'] == 2
    assert results['topology summary']['ring length'] == 4


def test_yaml_runner_rejects_bad_paths(tmp_path):
    with pytest.raises(ValueError):
        lan_network_simulation.main([str(tmp_path / "config.txt")])
    with pytest.raises(FileNotFoundError):
        lan_network_simulation.main([str(tmp_path / "missing.yaml")])


def test_configure_run_logging_creates_file(tmp_path, restore_root_logger):
    ensure_logging()
    path = configure_run_logging("My Run", log_dir=str(tmp_path))
    logging.getLogger("lan_simulation.test").debug("hop detail")
    for h in logging.getLogger().handlers:
        h.flush()
    assert path.startswith(str(tmp_path))
    assert "my_run_" in path
    with open(path, encoding="utf-8") as f:
        assert "hop detail" in f.read()


def test_yaml_runner_custom_ring_without_requests():
    cfg = {"topology": {"type": "ring", "nodes": [
        {"name": "a", "kind": "workstation"},
        {"name": "relay"},
        {"name": "lp", "kind": "printer"},
    ]}}
    report = io.StringIO()
    results = lan_network_simulation.run(cfg, report)
    assert results['outcomes'] == [True, True]
    assert "'a' requests printing of 'Hello World' on 'lp' ..." in report.getvalue()
    assert results['run statistics']['broadcasts'] == 1
