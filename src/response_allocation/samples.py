"""
Sample Data

A small demo fleet and incident set for two regions around the same
city, plus one evacuation plan. Used by the CLI `sample` command and by
tests that want a realistic starting state.
"""

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from response_allocation.evacuation.models import EvacuationPlanSpec
from response_allocation.incident.models import IncidentSpec
from response_allocation.resource.models import ResourceSpec

if TYPE_CHECKING:
    from response_allocation.coordinator import ResponseCoordinator


def sample_resources() -> list[ResourceSpec]:
    """Demo fleet: two rescue teams, boats, pumps, medical kits and food"""
    return [
        ResourceSpec(
            id="RT-001",
            name="Alpha Rescue Team",
            type="rescue_team",
            quantity=1,
            location="North District HQ",
            capacity_per_unit=8,
            deployment_time=15,
            capabilities={"water_rescue": True, "medical_aid": True, "search_and_rescue": True},
            constraints={
                "weather": ["normal", "rain"],
                "terrain": ["urban", "suburban", "rural"],
            },
        ),
        ResourceSpec(
            id="RT-002",
            name="Beta Rescue Team",
            type="rescue_team",
            quantity=1,
            location="South District HQ",
            capacity_per_unit=6,
            deployment_time=20,
            capabilities={"water_rescue": True, "medical_aid": False, "search_and_rescue": True},
            constraints={
                "weather": ["normal", "rain", "storm"],
                "terrain": ["urban", "suburban", "rural", "mountainous"],
            },
        ),
        ResourceSpec(
            id="VH-001",
            name="Rescue Boats",
            type="boat",
            quantity=5,
            location="Central Depot",
            capacity_per_unit=8,
            deployment_time=25,
            capabilities={"motorized": True, "shallow": True},
            constraints={
                "weather": ["normal", "rain", "light_storm"],
                "terrain": ["flooded_urban", "flooded_rural", "river"],
            },
        ),
        ResourceSpec(
            id="EQ-001",
            name="Water Pumps",
            type="water_pump",
            quantity=10,
            location="Equipment Warehouse",
            deployment_time=30,
            capabilities={"high_capacity": True, "portable": True},
            constraints={
                "weather": ["normal", "rain", "storm"],
                "terrain": ["urban", "suburban", "rural"],
            },
        ),
        ResourceSpec(
            id="SUP-001",
            name="Medical Kits",
            type="medical_kit",
            quantity=50,
            location="Medical Supplies Depot",
            deployment_time=15,
            capabilities={"emergency": True, "trauma": True},
        ),
        ResourceSpec(
            id="SUP-002",
            name="Food Supplies",
            type="food_supply",
            quantity=500,
            location="Food Bank",
            capacity_per_unit=1,
            deployment_time=60,
            capabilities={"non_perishable": True, "ready_to_eat": True},
        ),
    ]


def sample_incidents(now: datetime) -> list[IncidentSpec]:
    """Demo incidents, reported relative to `now`"""
    return [
        IncidentSpec.model_validate(
            {
                "id": "INC-001",
                "type": "flood",
                "severity": "high",
                "reported_at": now - timedelta(hours=2),
                "location": {
                    "lat": 12.9855,
                    "lng": 77.5959,
                    "description": "Riverside Housing Complex",
                },
                "estimated_affected_population": 2000,
                "status": "active",
                "region_id": "REG-001",
                "analysis": {
                    "causes": ["Heavy rainfall", "River overflow"],
                    "recommendations": ["Immediate evacuation", "Deploy water pumps"],
                },
            }
        ),
        IncidentSpec.model_validate(
            {
                "id": "INC-002",
                "type": "landslide",
                "severity": "medium",
                "reported_at": now - timedelta(hours=5),
                "location": {"lat": 12.9716, "lng": 77.62, "description": "Eastern Hill Area"},
                "estimated_affected_population": 500,
                "status": "contained",
                "region_id": "REG-002",
                "response_teams": ["RT-002"],
                "resources": ["EQ-003", "SUP-001"],
                "analysis": {
                    "causes": ["Heavy rainfall", "Soil erosion"],
                    "recommendations": ["Stabilize slopes", "Monitor for further movement"],
                },
            }
        ),
        IncidentSpec.model_validate(
            {
                "id": "INC-003",
                "type": "evacuation",
                "severity": "critical",
                "reported_at": now - timedelta(hours=1),
                "location": {"lat": 12.965, "lng": 77.58, "description": "Downtown District"},
                "estimated_affected_population": 5000,
                "status": "active",
                "region_id": "REG-001",
                "response_teams": ["RT-001"],
                "resources": ["VH-001", "SUP-002"],
                "analysis": {
                    "causes": ["Flash flood warning", "Dam overflow risk"],
                    "recommendations": ["Urgent evacuation", "Shelter preparation"],
                },
            }
        ),
    ]


def sample_evacuation_plan() -> EvacuationPlanSpec:
    """Evacuation plan for REG-001: two zones, two routes, two shelters"""
    return EvacuationPlanSpec.model_validate(
        {
            "evacuation_zones": [
                {"id": "zone-1", "name": "Riverside Housing Complex", "population": 5000, "priority": 10},
                {"id": "zone-2", "name": "Downtown Market", "population": 8000, "priority": 8},
            ],
            "routes": [
                {
                    "id": "route-1",
                    "name": "Main Street Route",
                    "origin": "Riverside Housing Complex",
                    "destination": "North District Shelter",
                    "distance_km": 3.5,
                    "estimated_time": 45,
                    "capacity_per_hour": 120,
                },
                {
                    "id": "route-2",
                    "name": "Highway 1 Route",
                    "origin": "Downtown Market",
                    "destination": "East District Shelter",
                    "distance_km": 5.2,
                    "estimated_time": 30,
                    "capacity_per_hour": 200,
                },
            ],
            "shelters": [
                {
                    "id": "shelter-1",
                    "name": "North District Shelter",
                    "location": {"lat": 12.995, "lng": 77.5959},
                    "capacity": 2000,
                    "facilities": ["Water", "Food", "Medical", "Sanitation"],
                },
                {
                    "id": "shelter-2",
                    "name": "East District Shelter",
                    "location": {"lat": 12.9716, "lng": 77.63},
                    "capacity": 3000,
                    "facilities": ["Water", "Food", "Sanitation"],
                },
            ],
            "timeline": {
                "estimated_completion_hours": 6,
                "phases": [
                    {"name": "Alert", "duration_minutes": 30},
                    {"name": "Evacuation", "duration_minutes": 240},
                    {"name": "Verification", "duration_minutes": 90},
                ],
            },
        }
    )


def load_sample_data(coordinator: "ResponseCoordinator") -> None:
    """Register the demo fleet, incidents and evacuation plan"""
    coordinator.register_resources(sample_resources())
    for incident in sample_incidents(coordinator.time_provider.now()):
        coordinator.record_incident(incident)
    coordinator.create_evacuation_plan("REG-001", sample_evacuation_plan())
