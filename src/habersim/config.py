"""Simulation configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

from habersim import constants
from habersim.models import ReactionState


@dataclass(frozen=True)
class SimulationConfig:
    """Tunable parameters of a simulation session.

    Attributes:
        history_length: Maximum number of history points kept.
        sample_every: Record a history point every this many chemistry ticks.
        base_step: Base integration step.
        speed: Multiplier applied to ``base_step``.
        particle_scale: Particles per unit concentration.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        initial_state: Seed composition and temperature.
        seed: Seed for the particle random source (``None`` for entropy).
    """

    history_length: int = constants.HISTORY_LENGTH
    sample_every: int = constants.HISTORY_SAMPLE_EVERY
    base_step: float = constants.BASE_STEP
    speed: float = constants.SIMULATION_SPEED
    particle_scale: float = constants.PARTICLE_SCALE
    canvas_width: float = constants.CANVAS_WIDTH
    canvas_height: float = constants.CANVAS_HEIGHT
    initial_state: ReactionState = field(default_factory=ReactionState)
    seed: int | None = None

    @property
    def dt(self) -> float:
        return self.base_step * self.speed

    def validate(self) -> None:
        if self.history_length < 1:
            raise ValueError(f"history_length must be at least 1, got {self.history_length}")
        if self.sample_every < 1:
            raise ValueError(f"sample_every must be at least 1, got {self.sample_every}")
        if self.dt <= 0:
            raise ValueError(f"Time step must be positive, got {self.dt}")
        if self.particle_scale <= 0:
            raise ValueError(f"particle_scale must be positive, got {self.particle_scale}")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(
                f"Canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        state = self.initial_state
        if min(state.n2, state.h2, state.nh3) < 0:
            raise ValueError(f"Initial concentrations must be non-negative, got {state}")
        if state.temperature <= 0:
            raise ValueError(f"Initial temperature must be positive, got {state.temperature}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = dict(data)
        if "initial_state" in kwargs:
            state_data = kwargs["initial_state"]
            if not isinstance(state_data, Mapping):
                raise ValueError("initial_state must be an object with n2, h2, nh3, temperature")
            kwargs["initial_state"] = ReactionState(
                n2=float(state_data.get("n2", constants.INITIAL_N2)),
                h2=float(state_data.get("h2", constants.INITIAL_H2)),
                nh3=float(state_data.get("nh3", constants.INITIAL_NH3)),
                temperature=float(state_data.get("temperature", constants.INITIAL_TEMPERATURE)),
            )

        config = cls(**kwargs)
        config.validate()
        return config


def load_config(config_file: str | Path) -> SimulationConfig:
    """Read a JSON configuration file."""
    with open(config_file, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{config_file}: expected a JSON object at the top level")
    return SimulationConfig.from_mapping(data)
