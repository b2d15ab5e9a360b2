"""
Tests for the command line front end.
"""

import pytest

from sniwatch import protocol
from sniwatch.main import build_parser, format_status, main


class TestParser:

    def test_defaults_to_run(self):
        args = build_parser().parse_args([])
        assert args.command == "run"
        assert args.bus_type is None

    def test_run_options(self):
        args = build_parser().parse_args(["run", "--system", "--log-level", "DEBUG", "--config", "x.yaml"])
        assert args.command == "run"
        assert args.bus_type == "system"
        assert args.log_level == "DEBUG"
        assert args.config == "x.yaml"

    def test_status_json(self):
        args = build_parser().parse_args(["status", "--json", "--session"])
        assert args.command == "status"
        assert args.json
        assert args.bus_type == "session"


class TestFormatStatus:

    def test_populated(self):
        text = format_status({
            protocol.REGISTERED_ITEMS: ["org.test.Item1", ":1.20"],
            protocol.HOST_REGISTERED: True,
            protocol.PROTOCOL_VERSION_PROPERTY: 0,
            protocol.REGISTERED_PATH_ITEMS: [("/StatusNotifierItem", ":1.5")],
        })
        assert "Protocol version: 0" in text
        assert "Host registered:  yes" in text
        assert "  org.test.Item1" in text
        assert "  :1.5 /StatusNotifierItem" in text

    def test_empty(self):
        text = format_status({
            protocol.REGISTERED_ITEMS: [],
            protocol.HOST_REGISTERED: False,
            protocol.PROTOCOL_VERSION_PROPERTY: 0,
        })
        assert "Host registered:  no" in text
        assert text.count("(none)") == 2


class TestBadConfig:

    def test_unparsable_yaml(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("bus: [unclosed\n")

        with pytest.raises(SystemExit) as exc:
            main(["status", "--config", str(path)])

        assert exc.value.code == 2
        assert "sniwatch" in capsys.readouterr().err

    def test_invalid_bus_type(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SNIWATCH_BUS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("bus:\n  bus_type: starter\n")

        with pytest.raises(SystemExit) as exc:
            main(["run", "--config", str(path)])

        assert exc.value.code == 2
