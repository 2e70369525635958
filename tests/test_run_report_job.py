import argparse
import json

import pytest

from brewery_insights.core.config import ConfigError, Settings
from brewery_insights.jobs import run_report


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    monkeypatch.setattr(run_report, "get_settings", lambda: Settings())


def _write(tmp_path, payload):
    path = tmp_path / "breweries.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


SAMPLE = [
    {"brewery_type": "micro", "country": "US", "state_province": "Oregon", "website_url": "https://a.example"},
    {"brewery_type": "micro", "country": "US", "state_province": "Oregon", "website_url": "https://b.example"},
    {"brewery_type": "nano", "country": "US", "state_province": "Colorado", "website_url": "https://c.example"},
    {"brewery_type": "planning", "country": "Canada", "state_province": "Ontario", "website_url": ""},
]


def test_load_records_accepts_list_and_object(tmp_path):
    assert len(run_report.load_records(_write(tmp_path, SAMPLE))) == 4
    assert len(run_report.load_records(_write(tmp_path, {"records": SAMPLE[:2]}))) == 2


def test_run_report_job_report_view(tmp_path):
    records = run_report.load_records(_write(tmp_path, SAMPLE))

    result = run_report.run_report_job(records=records, view="report")

    assert result["total"] == 4
    assert result["digital_presence"]["website_percentage"] == 75.0
    assert result["insights"][0]["title"] == "Dominant Model"


def test_run_report_job_chart_view(tmp_path):
    records = run_report.load_records(_write(tmp_path, SAMPLE))

    result = run_report.run_report_job(records=records, view="chart", mode="digital")

    assert result["display"]["mode"] == "digital"
    assert result["display"]["visibility"]["business_model"] is False
    assert [s["filter_value"] for s in result["suggestions"]] == ["micro", "Oregon"]


def test_run_report_job_no_data(caplog):
    with caplog.at_level("WARNING"):
        result = run_report.run_report_job(records=[], view="report")

    assert result == {"status": "no_data"}
    assert "No brewery records" in " ".join(caplog.messages)


def test_run_report_job_rejects_unknown_view():
    with pytest.raises(ValueError):
        run_report.run_report_job(records=[], view="map")


def test_build_parser_defaults(tmp_path):
    parser = run_report.build_parser()
    args = parser.parse_args([str(tmp_path / "in.json")])
    assert isinstance(parser, argparse.ArgumentParser)
    assert args.view == "report"
    assert args.mode == "all"


def test_main_prints_json(tmp_path, capsys):
    path = _write(tmp_path, SAMPLE)

    assert run_report.main([str(path), "--view", "chart"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["website_percentage"] == 75.0


def test_main_reports_bad_input(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert run_report.main([str(path)]) == 1
    assert run_report.main([str(tmp_path / "missing.json")]) == 1
    assert run_report.main([str(_write(tmp_path, {"items": []}))]) == 1


def test_main_config_error(tmp_path, monkeypatch):
    def broken_settings():
        raise ConfigError("TOP_CITIES must be positive")

    monkeypatch.setattr(run_report, "get_settings", broken_settings)

    assert run_report.main([str(_write(tmp_path, SAMPLE))]) == 2
