import csv
import json

from building_health.cli import main
from building_health.storage import ReportExporter

REPORT = {
    "building": {"bbl": "1000120034"},
    "sources": {
        "pluto": {"dataset": "pluto", "status": "ok", "count": 1, "error": ""},
        "rodents": {"dataset": "rodents", "status": "error", "count": 0, "error": "HTTP 500"},
    },
}


def test_export_report_default_path(tmp_path):
    path = ReportExporter(tmp_path / "out").export_report(REPORT)

    assert path == tmp_path / "out" / "building_1000120034.json"
    assert json.loads(path.read_text(encoding="utf-8")) == REPORT


def test_export_sources_csv(tmp_path):
    path = ReportExporter(tmp_path).export_sources_csv(REPORT)

    assert path.name == "building_1000120034_sources.csv"
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["dataset"] for r in rows] == ["pluto", "rodents"]
    assert rows[1]["error"] == "HTTP 500"


def test_report_without_building(tmp_path):
    assert ReportExporter(tmp_path).report_path({"building": None}).name == "building_unknown.json"


def test_cli_lists_datasets(capsys):
    assert main(["datasets"]) == 0
    assert "pluto" in capsys.readouterr().out


def test_cli_rejects_invalid_bbl(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BHX_API_BASE", "http://127.0.0.1:9")

    assert main(["lookup", "abc"]) == 1
    assert "INVALID_BBL" in capsys.readouterr().out
