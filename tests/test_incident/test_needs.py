"""
Tests for the Need Estimator

Quantities are exact ceilings of severity scale x population ratios.
"""

from datetime import datetime, timezone

import pytest

from response_allocation.incident.models import Incident
from response_allocation.incident.needs import needs_for, severity_scale, total_needs
from tests.helpers import make_incident


def build_incident(**kwargs) -> Incident:
    record = make_incident(**kwargs)
    record.setdefault("id", "INC-TEST")
    record["reported_at"] = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)
    return Incident.model_validate(record)


@pytest.mark.parametrize(
    "severity,expected",
    [("low", 1), ("medium", 2), ("high", 3), ("critical", 5), ("catastrophic", 1)],
)
def test_severity_scale(severity: str, expected: int) -> None:
    """Test severity scale, with unknown severities counting as low"""
    assert severity_scale(severity) == expected


def test_flood_high_2000() -> None:
    """Test the high-severity flood vector"""
    incident = build_incident(incident_type="flood", severity="high", population=2000)

    assert needs_for(incident) == {
        "rescue_team": 6,
        "boat": 3,
        "water_pump": 6,
        "medical_kit": 12,
        "shelter_kit": 6,
    }


def test_needs_keep_table_order() -> None:
    """Test result keys follow the profile order"""
    incident = build_incident(incident_type="flood", severity="low", population=10)
    assert list(needs_for(incident)) == [
        "rescue_team",
        "boat",
        "water_pump",
        "medical_kit",
        "shelter_kit",
    ]


def test_flood_critical_5000() -> None:
    """Test a critical flood, the two-team scenario's incident"""
    incident = build_incident(incident_type="flood", severity="critical", population=5000)

    assert needs_for(incident) == {
        "rescue_team": 25,
        "boat": 13,
        "water_pump": 10,
        "medical_kit": 50,
        "shelter_kit": 25,
    }


def test_landslide_without_population_defaults_to_100() -> None:
    """Test a missing population estimate is treated as 100 people"""
    incident = build_incident(incident_type="landslide", severity="medium", population=None)

    assert needs_for(incident) == {
        "rescue_team": 1,
        "excavator": 2,
        "medical_kit": 1,
        "shelter_kit": 1,
    }


def test_evacuation_critical_5000() -> None:
    """Test the evacuation profile (12.5 rescue teams rounds up to 13)"""
    incident = build_incident(incident_type="evacuation", severity="critical", population=5000)

    assert needs_for(incident) == {
        "transport": 50,
        "rescue_team": 13,
        "medical_kit": 25,
        "food_supply": 25000,
    }


def test_unknown_type_uses_default_profile() -> None:
    """Test unknown incident types get one team per scale step plus medical kits"""
    incident = build_incident(incident_type="wildfire", severity="high", population=2500)

    assert needs_for(incident) == {"rescue_team": 3, "medical_kit": 8}


def test_zero_population_is_kept() -> None:
    """Test an explicit population of 0 is not replaced by the default"""
    incident = build_incident(incident_type="flood", severity="high", population=0)

    assert needs_for(incident) == {
        "rescue_team": 0,
        "boat": 0,
        "water_pump": 6,
        "medical_kit": 0,
        "shelter_kit": 0,
    }


def test_custom_default_population() -> None:
    """Test the default population is configurable"""
    incident = build_incident(incident_type="flood", severity="low", population=None)
    assert needs_for(incident, default_population=4000)["rescue_team"] == 4


def test_total_needs_sums_by_type() -> None:
    """Test needs add up across incidents"""
    flood = build_incident(incident_type="flood", severity="high", population=2000)
    evacuation = build_incident(incident_type="evacuation", severity="critical", population=5000)

    totals = total_needs([flood, evacuation])
    assert totals["rescue_team"] == 19
    assert totals["medical_kit"] == 37
    assert totals["transport"] == 50
    assert total_needs([]) == {}
