"""
Allocation Policy - tunable parameters of the scoring engine

The defaults give the standard scores; changing them
changes every score the coordinator reports, so treat a custom policy as
part of the deployment's configuration.

Fun fact: The 60-minute response horizon echoes the "golden hour" of trauma
care, a phrase popularized by R Adams Cowley at the Maryland Shock Trauma
Center in the 1960s and 70s.
"""

from pydantic import BaseModel, Field, model_validator


class AllocationPolicy(BaseModel):
    """
    Scoring and estimation parameters

    Weights are applied to the type-coverage, quantity-coverage and
    response-time factors of the effectiveness score.
    """

    policy_version: str = Field(
        default="1.0",
        description="Policy version for tracking changes over time",
    )

    type_coverage_weight: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Weight of needed-type coverage"
    )

    quantity_coverage_weight: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Weight of needed-quantity coverage"
    )

    response_time_weight: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Weight of the slowest-arrival factor"
    )

    response_time_horizon_minutes: float = Field(
        default=60.0,
        gt=0.0,
        description="Arrival time at which response-time scores reach zero",
    )

    no_incident_effectiveness: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Effectiveness reported when allocating into a region with no active incidents",
    )

    coverage_met_fraction: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Fraction of an incident's needs that must be met for it to count as covered",
    )

    default_affected_population: int = Field(
        default=100,
        ge=0,
        description="Population assumed when an incident has no estimate",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_weights_sum(self) -> "AllocationPolicy":
        """Effectiveness weights must sum to 1 so scores stay within 0-100"""
        total = (
            self.type_coverage_weight
            + self.quantity_coverage_weight
            + self.response_time_weight
        )
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Effectiveness weights must sum to 1.0, got {total}")
        return self


default_allocation_policy = AllocationPolicy()
