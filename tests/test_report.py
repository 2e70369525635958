import json

import pytest

from brewery_insights.analytics.completeness import EmptyInputError
from brewery_insights.analytics.ratios import NOT_APPLICABLE
from brewery_insights.analytics.report import build_analysis_report, build_chart_data, to_jsonable
from brewery_insights.analytics.view_modes import DisplayState
from brewery_insights.core.config import Settings
from brewery_insights.models import BreweryRecord


def test_analysis_report_scenario(scenario_records):
    report = build_analysis_report(scenario_records, Settings())

    assert report["total"] == 4
    assert report["country_count"] == 2
    assert [m["key"] for m in report["business_models"]] == ["micro", "nano", "planning"]
    assert report["business_models"][0]["percentage"] == 50.0
    assert report["top_countries"][0] == {"key": "US", "label": "US", "count": 3, "percentage": 75.0}
    assert report["top_states"][0] == {"key": "Oregon", "count": 2}
    assert report["digital_presence"]["website_percentage"] == 75.0
    assert report["digital_presence"]["phone_percentage"] == 0.0
    by_type = {row["key"]: row for row in report["digital_presence"]["by_type"]}
    assert by_type["micro"]["percentage"] == 100.0
    assert by_type["planning"]["percentage"] == 0.0
    # country + state filled on every record, nothing else
    assert report["address_completeness"]["average_percentage"] == 40.0
    assert report["address_completeness"]["missing_percentage"] == 60.0
    assert report["clustering"] == {"top_n": 5, "percentage": 100.0}


def test_analysis_report_respects_cutoffs():
    records = [BreweryRecord(country=f"Country {i}", city=f"City {i}") for i in range(20)]

    report = build_analysis_report(records, Settings(top_countries=2, top_cities=3))

    assert len(report["top_countries"]) == 2
    assert len(report["top_cities"]) == 3
    assert report["top_countries"][0]["key"] == "Country 0"


def test_report_and_chart_require_records():
    with pytest.raises(EmptyInputError):
        build_analysis_report([], Settings())
    with pytest.raises(EmptyInputError):
        build_chart_data([], Settings())


def test_chart_data_scenario(scenario_records):
    chart = build_chart_data(scenario_records, Settings(top_states_chart=1), DisplayState().select_mode("business"))

    assert [row["label"] for row in chart["type_distribution"]] == ["Micro", "Nano", "Planning"]
    assert chart["top_states"] == [{"key": "Oregon", "count": 2}]
    assert [row["key"] for row in chart["website_by_type"]] == ["micro", "nano", "planning"]
    assert chart["country_distribution"][0] == {"name": "US", "value": 3, "percentage": 75.0}
    assert chart["website_percentage"] == 75.0
    assert [s.filter_key for s in chart["suggestions"]] == ["brewery_type", "state"]
    assert chart["display"].visibility.geographic is False


def test_chart_data_hidden_panels(scenario_records):
    display = DisplayState().hide_insights().hide_suggestions()

    chart = build_chart_data(scenario_records, Settings(), display)

    assert chart["insights"] == []
    assert chart["suggestions"] == []


def test_chart_website_by_type_sorted_by_total():
    records = [
        BreweryRecord(brewery_type="nano"),
        BreweryRecord(brewery_type="micro", website_url="https://a.example"),
        BreweryRecord(brewery_type="micro"),
    ]

    chart = build_chart_data(records, Settings())

    assert [(row["key"], row["percentage"]) for row in chart["website_by_type"]] == [("micro", 50.0), ("nano", 0.0)]


def test_missing_states_scenario():
    records = [BreweryRecord(brewery_type="micro"), BreweryRecord(brewery_type="micro")]

    chart = build_chart_data(records, Settings())

    assert chart["top_states"] == [{"key": "Unknown", "count": 2}]
    assert chart["suggestions"][1].filter_value == "Unknown"


def test_to_jsonable_converts_values(scenario_records):
    chart = build_chart_data(scenario_records, Settings())

    payload = to_jsonable(chart)

    assert payload["display"]["mode"] == "all"
    assert payload["suggestions"][0]["filter_value"] == "micro"
    assert to_jsonable({"ratio": NOT_APPLICABLE, "pair": ("a", 1)}) == {"ratio": None, "pair": ["a", 1]}
    json.dumps(payload)
