"""
Evacuation Plan Models

Zones to clear, the routes out of them and the shelters they lead to.

Fun fact: Operation Dynamo evacuated roughly 338,000 soldiers from the
beaches of Dunkirk in nine days in 1940, largely with civilian boats.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class EvacuationZone(BaseModel):
    """Area whose population must be moved"""

    id: str = Field(..., min_length=1, description="Zone identifier")
    name: str = Field(..., description="Zone name")
    population: int = Field(..., ge=0, description="Population in this zone")
    priority: int = Field(..., ge=1, le=10, description="Priority level (1-10, 10 first)")
    boundaries: dict = Field(default_factory=dict, description="Zone boundaries (GeoJSON)")


class EvacuationRoute(BaseModel):
    """Road from a zone to a shelter"""

    id: str = Field(..., min_length=1, description="Route identifier")
    name: str = Field(..., description="Route name")
    origin: str = Field(..., description="Starting point")
    destination: str = Field(..., description="Destination shelter")
    distance_km: float = Field(..., ge=0, description="Distance in km")
    estimated_time: int = Field(..., ge=0, description="Travel time in minutes")
    capacity_per_hour: int = Field(..., ge=0, description="People per hour")
    accessible: bool = Field(default=True, description="Whether the route is currently usable")


class ShelterLocation(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Shelter(BaseModel):
    """Emergency shelter"""

    id: str = Field(..., min_length=1, description="Shelter identifier")
    name: str = Field(..., description="Shelter name")
    location: ShelterLocation | None = Field(default=None)
    capacity: int = Field(..., ge=0, description="Maximum capacity")
    current_occupancy: int = Field(default=0, ge=0, description="Current occupancy")
    facilities: list[str] = Field(default_factory=list)

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - self.current_occupancy)


class EvacuationPhase(BaseModel):
    name: str = Field(..., description="Phase name, e.g. Alert")
    duration_minutes: int = Field(..., ge=0, description="Phase duration")


class EvacuationTimeline(BaseModel):
    estimated_completion_hours: float = Field(default=0, ge=0)
    phases: list[EvacuationPhase] = Field(default_factory=list)


class EvacuationPlanSpec(BaseModel):
    """Plan as submitted, before the store assigns an id"""

    evacuation_zones: list[EvacuationZone] = Field(default_factory=list)
    routes: list[EvacuationRoute] = Field(default_factory=list)
    shelters: list[Shelter] = Field(default_factory=list)
    timeline: EvacuationTimeline = Field(default_factory=EvacuationTimeline)


class EvacuationPlan(EvacuationPlanSpec):
    """Stored evacuation plan"""

    id: str = Field(..., description="Plan identifier (evac-plan-...)")
    region_id: str = Field(..., description="Region the plan covers")
    created_at: datetime = Field(..., description="Creation timestamp")

    @property
    def total_population(self) -> int:
        return sum(z.population for z in self.evacuation_zones)

    @property
    def available_shelter_capacity(self) -> int:
        return sum(s.free_capacity for s in self.shelters)

    def zones_by_priority(self) -> list[EvacuationZone]:
        """Highest priority first; ties keep plan order"""
        return sorted(self.evacuation_zones, key=lambda z: -z.priority)
