import sys
from pathlib import Path

import pytest

# Ensure `brewery_insights` is importable when running pytest from the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from brewery_insights.models import BreweryRecord  # noqa: E402


def full_address(**fields):
    base = {
        "address_1": "1 Main St",
        "city": "Bend",
        "state_province": "Oregon",
        "postal_code": "97701",
        "country": "United States",
    }
    base.update(fields)
    return BreweryRecord(**base)


@pytest.fixture
def scenario_records():
    """Four breweries: three US micro/nano, one Canadian planning; websites on three."""
    return [
        BreweryRecord(brewery_type="micro", country="US", state_province="Oregon", website_url="https://a.example"),
        BreweryRecord(brewery_type="micro", country="US", state_province="Oregon", website_url="https://b.example"),
        BreweryRecord(brewery_type="nano", country="US", state_province="Colorado", website_url="https://c.example"),
        BreweryRecord(brewery_type="planning", country="Canada", state_province="Ontario"),
    ]
