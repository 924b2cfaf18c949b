"""
Evacuation Module

Write-once evacuation plans per region: zones, routes, shelters, timeline.
"""

from response_allocation.evacuation.commands import CreateEvacuationPlan
from response_allocation.evacuation.events import EvacuationPlanCreated
from response_allocation.evacuation.handlers import EvacuationCommandHandlers
from response_allocation.evacuation.models import (
    EvacuationPhase,
    EvacuationPlan,
    EvacuationPlanSpec,
    EvacuationRoute,
    EvacuationTimeline,
    EvacuationZone,
    Shelter,
    ShelterLocation,
)
from response_allocation.evacuation.projections import EvacuationPlanRegistry

__all__ = [
    "CreateEvacuationPlan",
    "EvacuationPlanCreated",
    "EvacuationCommandHandlers",
    "EvacuationPhase",
    "EvacuationPlan",
    "EvacuationPlanSpec",
    "EvacuationRoute",
    "EvacuationTimeline",
    "EvacuationZone",
    "Shelter",
    "ShelterLocation",
    "EvacuationPlanRegistry",
]
