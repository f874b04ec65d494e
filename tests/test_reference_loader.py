import json

import pytest

from riskmap.models.strategy import Strategy
from riskmap.reference import loader
from riskmap.reference.loader import load_reference_data, load_reference_snapshot


def test_bundled_snapshot_loads():
    reference = load_reference_data()

    assert len(reference.countries) == 22
    assert len(reference.industries) == 15
    assert reference.default_activity == 10
    assert reference.default_effectiveness[Strategy.CONTINUOUS_MONITORING] == 85
    assert reference.industry("Manufacturing").risk_multiplier == 1.2
    assert reference.country("Bangladesh").base_risk_score == 82


def test_reference_values_within_documented_ranges():
    reference = load_reference_data()

    assert all(1 <= c.base_risk_score <= 100 for c in reference.countries)
    assert all(0.1 <= i.risk_multiplier <= 3.0 for i in reference.industries)


def test_countries_are_sorted_by_name():
    names = [c.name for c in load_reference_data().countries]
    assert names == sorted(names)


def test_missing_snapshot():
    with pytest.raises(FileNotFoundError):
        load_reference_snapshot("reference_v0_missing")


def test_snapshot_without_version(tmp_path, monkeypatch):
    (tmp_path / "broken.json").write_text(json.dumps({"countries": []}))
    monkeypatch.setattr(loader, "SNAPSHOT_DIR", tmp_path)

    with pytest.raises(ValueError, match="snapshot_version"):
        load_reference_snapshot("broken.json")


def test_loose_lookups():
    reference = load_reference_data()

    assert reference.find_country("DE").name == "Germany"
    assert reference.find_country("bangla").name == "Bangladesh"
    assert reference.find_country("Atlantis") is None
    assert reference.find_industry("TEXT").name == "Textiles"
    assert reference.find_industry("piracy") is None
