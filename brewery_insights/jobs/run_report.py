"""CLI job that reads brewery records from a JSON file and prints analytics."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from brewery_insights.analytics.completeness import EmptyInputError
from brewery_insights.analytics.report import build_analysis_report, build_chart_data, to_jsonable
from brewery_insights.analytics.view_modes import DisplayState, ViewMode
from brewery_insights.core.config import ConfigError, get_settings
from brewery_insights.etl.transform import extract_items, to_brewery_records
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

NO_DATA = {"status": "no_data"}


def load_records(path: Path) -> List[BreweryRecord]:
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    records = to_brewery_records(extract_items(payload))
    logger.info("Loaded %d brewery records from %s", len(records), path)
    return records


def run_report_job(*, records: Sequence[BreweryRecord], view: str, mode: str = ViewMode.ALL.value) -> Dict[str, Any]:
    settings = get_settings()
    try:
        if view == "chart":
            result = build_chart_data(records, settings, DisplayState().select_mode(mode))
        elif view == "report":
            result = build_analysis_report(records, settings)
        else:
            raise ValueError(f"unknown view: {view}")
    except EmptyInputError:
        logger.warning("No brewery records supplied; returning no-data state")
        return dict(NO_DATA)
    return to_jsonable(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute brewery analytics from a JSON record file")
    parser.add_argument("input", type=Path, help="JSON file: a list of records or an object with a 'records' list")
    parser.add_argument("--view", choices=("report", "chart"), default="report", help="Which view to compute")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ViewMode],
        default=ViewMode.ALL.value,
        help="Chart visibility preset (chart view only)",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        records = load_records(args.input)
        result = run_report_job(records=records, view=args.view, mode=args.mode)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Unable to process %s: %s", args.input, exc)
        return 1

    json.dump(result, sys.stdout, ensure_ascii=False, indent=args.indent)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
