"""
Response Allocation CLI

Loads a JSON scenario into an in-memory coordinator and prints what the
optimizer would do with it. Nothing is persisted between runs.

Usage:
    respond sample --output scenario.json
    respond recommend --scenario scenario.json --region REG-001
    respond recommend --scenario scenario.json --region REG-001 --max-response-time 20 --json
    respond simulate --scenario scenario.json --region REG-001 --user dispatcher-7

Scenario format:
    {"resources": [{...}, ...], "incidents": [{...}, ...]}
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from typing_extensions import Annotated

from response_allocation.allocation.models import AllocationRecommendation, OptimizationParameters
from response_allocation.coordinator import ResponseCoordinator
from response_allocation.kernel.errors import InvalidIncidentError
from response_allocation.kernel.logging import configure_logging_from_env
from response_allocation.kernel.time import RealTimeProvider
from response_allocation.samples import sample_incidents, sample_resources

# Logs go to stderr (LOG_LEVEL / ENVIRONMENT); stdout stays clean for JSON
configure_logging_from_env()

app = typer.Typer(
    name="respond",
    help="Response Allocation - emergency resource recommendations",
    add_completion=False,
)


def load_scenario(path: Path) -> ResponseCoordinator:
    """Build a fresh coordinator from a scenario file"""
    if not path.exists():
        typer.echo(f"Error: Scenario not found: {path}", err=True)
        raise typer.Exit(1)

    try:
        scenario = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Scenario is not valid JSON: {e}", err=True)
        raise typer.Exit(1)

    if not isinstance(scenario, dict):
        typer.echo("Error: Scenario must be a JSON object with resources and incidents", err=True)
        raise typer.Exit(1)

    coordinator = ResponseCoordinator()
    resources = scenario.get("resources", [])
    registered = coordinator.register_resources(resources)
    if registered != len(resources):
        typer.echo(
            f"Warning: skipped {len(resources) - registered} invalid resource(s)", err=True
        )

    for incident in scenario.get("incidents", []):
        try:
            coordinator.record_incident(incident)
        except InvalidIncidentError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    return coordinator


def print_recommendation(recommendation: AllocationRecommendation) -> None:
    typer.echo(f"\nRecommendation for {recommendation.region_id}")
    typer.echo(
        f"  Scores: overall {recommendation.scores.overall}, "
        f"coverage {recommendation.scores.coverage}, "
        f"response time {recommendation.scores.response_time}"
    )

    if not recommendation.recommended_allocation:
        typer.echo("  No resources recommended")
    for item in recommendation.recommended_allocation:
        typer.echo(
            f"  - {item.resource_id} x{item.quantity} -> {item.destination_location} "
            f"(ETA {item.estimated_arrival_time:g} min)"
        )

    if recommendation.unmet_needs:
        typer.echo("  Unmet needs:")
        for resource_type, gap in recommendation.unmet_needs.items():
            typer.echo(f"    {resource_type}: {gap}")


@app.command()
def sample(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the scenario to this file"),
    ] = None,
) -> None:
    """Print (or write) the demo scenario as JSON"""
    now = RealTimeProvider().now()
    scenario: dict[str, Any] = {
        "resources": [r.model_dump(mode="json") for r in sample_resources()],
        "incidents": [i.model_dump(mode="json") for i in sample_incidents(now)],
    }
    text = json.dumps(scenario, indent=2)

    if output is None:
        typer.echo(text)
        return

    output.write_text(text)
    typer.echo(f"✓ Wrote sample scenario: {output}")


@app.command()
def recommend(
    scenario: Annotated[Path, typer.Option("--scenario", help="Scenario JSON file")],
    region: Annotated[str, typer.Option("--region", help="Region to allocate for")],
    max_response_time: Annotated[
        Optional[float],
        typer.Option("--max-response-time", help="Ignore resources slower than this (minutes)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Recommend an allocation for a region"""
    coordinator = load_scenario(scenario)
    recommendation = coordinator.calculate_optimal_allocation(
        region, OptimizationParameters(max_response_time=max_response_time)
    )

    if json_output:
        typer.echo(json.dumps(recommendation.model_dump(mode="json"), indent=2))
        return

    print_recommendation(recommendation)


@app.command()
def simulate(
    scenario: Annotated[Path, typer.Option("--scenario", help="Scenario JSON file")],
    region: Annotated[str, typer.Option("--region", help="Region to allocate for")],
    user: Annotated[str, typer.Option("--user", help="User committing the allocation")] = "cli",
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Recommend, commit the recommendation and show the resulting inventory"""
    coordinator = load_scenario(scenario)
    recommendation = coordinator.calculate_optimal_allocation(region)
    receipt = coordinator.create_allocation(
        region, recommendation.recommended_allocation, user
    )
    statistics = coordinator.get_allocation_statistics()

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "recommendation": recommendation.model_dump(mode="json"),
                    "receipt": receipt.model_dump(mode="json"),
                    "statistics": statistics.model_dump(mode="json"),
                },
                indent=2,
            )
        )
        return

    print_recommendation(recommendation)

    typer.echo(f"\n✓ Created allocation: {receipt.allocation_id}")
    typer.echo(f"  Effectiveness: {receipt.effectiveness_score}")
    typer.echo(f"  Committed items: {receipt.committed_count}/{len(receipt.results)}")
    for result in receipt.results:
        if not result.committed:
            typer.echo(
                f"  ! {result.resource_id}: {result.outcome.value} "
                f"(requested {result.requested}, on hand {result.remaining_quantity})"
            )

    typer.echo("\nInventory by type:")
    for resource_type, stats in sorted(statistics.by_type.items()):
        typer.echo(
            f"  {resource_type}: allocated {stats.allocated}, "
            f"available {stats.available}, total {stats.total}"
        )
    typer.echo(f"  Active allocations: {statistics.active_allocations}")
    typer.echo(f"  Active incidents: {statistics.active_incidents}")


if __name__ == "__main__":
    app()
