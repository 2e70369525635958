"""HTTP entrypoint that serves brewery analytics for posted record sets."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Tuple

from flask import Flask, jsonify, request

from brewery_insights.analytics.completeness import EmptyInputError
from brewery_insights.analytics.report import build_analysis_report, build_chart_data, to_jsonable
from brewery_insights.analytics.suggestions import generate_suggestions
from brewery_insights.analytics.view_modes import DisplayState, ViewMode
from brewery_insights.core.config import get_settings
from brewery_insights.etl.transform import to_brewery_records
from brewery_insights.models import BreweryRecord

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)


class PayloadError(ValueError):
    """Raised when a request body cannot be turned into brewery records."""


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint that reports the effective thresholds."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "digital_threshold": settings.digital_threshold,
                "address_fields": list(settings.address_fields),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/analysis")
def analysis() -> Any:
    """
    Comprehensive report for the posted records.
    Required JSON field: records (list)
    """
    try:
        records = _records_from_request()
    except PayloadError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        report = build_analysis_report(records, get_settings())
    except EmptyInputError:
        return _no_data()
    return jsonify({"data": to_jsonable(report)}), 200


@app.post("/visualization")
def visualization() -> Any:
    """
    Chart series for the posted records.
    Required JSON field: records (list)
    Optional: mode (all | business | geographic | digital)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    try:
        records = _records_from_request()
        display = DisplayState().select_mode(payload.get("mode") or ViewMode.ALL.value)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        chart = build_chart_data(records, get_settings(), display)
    except EmptyInputError:
        return _no_data()
    return jsonify({"data": to_jsonable(chart)}), 200


@app.post("/suggestions")
def suggestions() -> Any:
    """Filter suggestions for the posted records."""
    try:
        records = _records_from_request()
    except PayloadError as exc:
        return jsonify({"error": str(exc)}), 400

    if not records:
        return _no_data()
    result = generate_suggestions(records, digital_threshold=get_settings().digital_threshold)
    return jsonify({"data": to_jsonable(result)}), 200


# ---------- Internals ----------


def _records_from_request() -> List[BreweryRecord]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise PayloadError("request body must be a JSON object")
    items = payload.get("records")
    if not isinstance(items, list):
        raise PayloadError("records must be a list")
    try:
        records = to_brewery_records(items)
    except TypeError as exc:
        raise PayloadError(str(exc)) from exc
    logger.info("Received %d brewery records on %s", len(records), request.path)
    return records


def _no_data() -> Tuple[Any, int]:
    logger.warning("No brewery records supplied to %s", request.path)
    return jsonify({"data": {"status": "no_data"}}), 200


def main() -> None:
    port = get_settings().server_port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
