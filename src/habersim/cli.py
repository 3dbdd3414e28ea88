"""Command-line entrypoints for habersim."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Annotated

import typer

from habersim import constants
from habersim.config import SimulationConfig, load_config
from habersim.equilibrium import (
    equilibrium_constant,
    equilibrium_state,
    reaction_quotient,
    shift_direction,
)
from habersim.gui.simulation import SimulationSession
from habersim.kinetics import calculate_rate
from habersim.models import ReactionState

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Ammonia synthesis equilibrium simulator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(config_file: Path | None) -> SimulationConfig:
    if config_file is None:
        return SimulationConfig()
    try:
        return load_config(config_file)
    except (OSError, ValueError, TypeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="CONFIG_FILE") from exc


@app.command()
def run(
    config_file: Annotated[
        Path | None, typer.Argument(help="Path to JSON configuration file.")
    ] = None,
    ticks: Annotated[int, typer.Option(min=0, help="Number of chemistry ticks.")] = 500,
    temperature: Annotated[
        float | None,
        typer.Option(help="Override the temperature after start-up."),
    ] = None,
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
) -> None:
    """Run the reaction headlessly and print the sampled history."""
    session = SimulationSession(_load(config_file))
    if temperature is not None:
        try:
            session.set_temperature(temperature)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--temperature") from exc

    for _ in range(ticks):
        session.chemistry_tick()

    final = session.view_state
    payload = {
        "ticks": session.integrator.tick,
        "dt": session.config.dt,
        "history": [point.as_dict() for point in session.history],
        "final": final.as_dict(),
        "rate": calculate_rate(final.n2, final.h2, final.nh3, final.temperature),
        "particles": {species.value: count for species, count in session.population.counts().items()},
    }

    json_output = json.dumps(payload, indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)


@app.command()
def equilibrium(
    n2: Annotated[float, typer.Option(min=0.0, help="N2 concentration.")] = constants.INITIAL_N2,
    h2: Annotated[float, typer.Option(min=0.0, help="H2 concentration.")] = constants.INITIAL_H2,
    nh3: Annotated[float, typer.Option(min=0.0, help="NH3 concentration.")] = constants.INITIAL_NH3,
    temperature: Annotated[
        float, typer.Option(help="Temperature (arb. units).")
    ] = constants.INITIAL_TEMPERATURE,
) -> None:
    """Report the direction of shift and the predicted equilibrium composition."""
    low, high = constants.TEMPERATURE_RANGE
    if not low <= temperature <= high:
        raise typer.BadParameter(
            f"Temperature must be within [{low}, {high}], got {temperature}",
            param_hint="--temperature",
        )
    state = ReactionState(n2=n2, h2=h2, nh3=nh3, temperature=temperature)
    final = equilibrium_state(state)
    quotient = reaction_quotient(state)
    payload = {
        "state": state.as_dict(),
        "rate": calculate_rate(n2, h2, nh3, temperature),
        "direction": shift_direction(state),
        "equilibrium_constant": equilibrium_constant(temperature),
        # JSON has no infinity or NaN.
        "reaction_quotient": quotient if math.isfinite(quotient) else None,
        "equilibrium": final.as_dict(),
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def gui(
    config_file: Annotated[
        Path | None, typer.Argument(help="Path to JSON configuration file.")
    ] = None,
) -> None:
    """Open the interactive desktop view."""
    from habersim.gui.app import main as gui_main

    gui_main(_load(config_file))


if __name__ == "__main__":
    app()
