"""Simulation helpers for the GUI layer.

:class:`SimulationSession` ties the chemistry integrator and the particle
population to two independently clocked callbacks and is free of any GUI
framework. The authoritative state lives in the integrator; after every change
a separate copy is published in :attr:`SimulationSession.view_state` for the
presentation layer to read.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

import numpy as np

from habersim import constants
from habersim.config import SimulationConfig
from habersim.integrator import ReactionIntegrator
from habersim.models import HistoryPoint, ReactionState
from habersim.particles import Particle, ParticlePopulation

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Registers a repeating callback and returns a handle used to cancel it."""

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> object:
        ...

    def cancel(self, handle: object) -> None:
        ...


def _check_range(name: str, value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    value = float(value)
    if not low <= value <= high:
        raise ValueError(f"{name} must be within [{low}, {high}], got {value}")
    return value


class SimulationSession:
    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.config.validate()

        self.integrator = ReactionIntegrator(
            initial_state=self.config.initial_state,
            dt=self.config.dt,
            history_length=self.config.history_length,
            sample_every=self.config.sample_every,
        )
        self.population = ParticlePopulation(
            width=self.config.canvas_width,
            height=self.config.canvas_height,
            scale=self.config.particle_scale,
            rng=rng if rng is not None else np.random.default_rng(self.config.seed),
        )
        self._handles: list[object] = []
        self._scheduler: Scheduler | None = None
        self._publish()

    @property
    def view_state(self) -> ReactionState:
        return self._view_state.copy()

    @property
    def history(self) -> tuple[HistoryPoint, ...]:
        return self.integrator.history

    @property
    def particles(self) -> tuple[Particle, ...]:
        return self.population.particles

    @property
    def total_particles(self) -> int:
        return len(self.population)

    @property
    def running(self) -> bool:
        return bool(self._handles)

    def _publish(self) -> None:
        self._view_state = self.integrator.state
        self.population.reconcile(self._view_state)

    def chemistry_tick(self) -> None:
        self.integrator.step()
        self._publish()

    def animation_tick(self) -> None:
        self.population.tick(self._view_state.temperature)

    def set_n2(self, value: float) -> None:
        value = _check_range("N2 concentration", value, constants.CONCENTRATION_RANGE)
        self.integrator.set_n2(value)
        logger.info("N2 set to %.3f", value)
        self._publish()

    def set_h2(self, value: float) -> None:
        value = _check_range("H2 concentration", value, constants.CONCENTRATION_RANGE)
        self.integrator.set_h2(value)
        logger.info("H2 set to %.3f", value)
        self._publish()

    def set_temperature(self, value: float) -> None:
        value = _check_range("Temperature", value, constants.TEMPERATURE_RANGE)
        self.integrator.set_temperature(value)
        logger.info("Temperature set to %.3f", value)
        self._publish()

    def reset(self) -> None:
        self.integrator.reset()
        self.population.clear()
        self._publish()

    def start(
        self,
        scheduler: Scheduler,
        chemistry_interval_ms: int = constants.FRAME_INTERVAL_MS,
        animation_interval_ms: int = constants.FRAME_INTERVAL_MS,
    ) -> None:
        if self.running:
            return
        self._scheduler = scheduler
        self._handles = [
            scheduler.schedule(chemistry_interval_ms, self.chemistry_tick),
            scheduler.schedule(animation_interval_ms, self.animation_tick),
        ]
        logger.info("Simulation started")

    def stop(self) -> None:
        if not self.running:
            return
        for handle in self._handles:
            self._scheduler.cancel(handle)
        self._handles = []
        self._scheduler = None
        logger.info("Simulation stopped after %d ticks", self.integrator.tick)
