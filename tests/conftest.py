import os

import pytest

# Keep the API module from writing a vault into the working tree on import
os.environ.setdefault("RISKMAP_STORAGE", "none")

from riskmap.models.reference import Country, Industry
from riskmap.reference.loader import ReferenceData


@pytest.fixture
def reference():
    """Small, hand-checkable reference tables."""
    return ReferenceData(
        countries=[
            Country("Testland", 50, iso_code="TL"),
            Country("Midland", 50, iso_code="ML"),
            Country("Lowland", 20, iso_code="LL"),
            Country("Highland", 80, iso_code="HL"),
            Country("Maxland", 100, iso_code="XL"),
            Country("Oddland", 73, iso_code="OL"),
        ],
        industries=[
            Industry("Manufacturing", 1.2),
            Industry("Services", 1.0),
            Industry("Extreme", 3.0),
        ],
    )
