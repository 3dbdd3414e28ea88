"""Explicit Euler integration of the ammonia equilibrium.

The integrator owns the authoritative :class:`ReactionState`. Each call to
:meth:`ReactionIntegrator.step` computes the net rate, advances the
concentrations along the reaction stoichiometry, clamps them at zero and, on a
fixed cadence, records a :class:`HistoryPoint`.

The step size is a configuration constant (base step times speed multiplier).
Wall-clock time never drives the chemistry, so a given number of steps always
produces the same trajectory regardless of how fast frames are rendered.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque

from habersim import constants
from habersim.kinetics import AMMONIA_KINETICS, KineticsModel
from habersim.models import HABER_BOSCH, HistoryPoint, MoleculeType, Reaction, ReactionState

logger = logging.getLogger(__name__)

DEFAULT_DT = constants.BASE_STEP * constants.SIMULATION_SPEED


def advance(
    state: ReactionState,
    dt: float = DEFAULT_DT,
    kinetics: KineticsModel = AMMONIA_KINETICS,
    reaction: Reaction = HABER_BOSCH,
) -> ReactionState:
    """Return the state one explicit Euler step after ``state``.

    Args:
        state: Current state. Not modified.
        dt: Step size in scaled time units.
        kinetics: Net rate model; positive rates form products.
        reaction: Supplies the stoichiometric coefficients.

    Returns:
        A new state with all concentrations clamped to be non-negative. The
        temperature is carried over unchanged.

    A single step never converts more than the limiting species holds; a
    stiff step empties that species instead of overshooting it.
    """
    concentrations = state.concentrations()
    rate = kinetics.rate(concentrations, state.temperature)
    lower, upper = reaction.extent_bounds(concentrations)
    extent = min(max(rate * dt, lower), upper)

    n2 = state.n2 + reaction.coefficient(MoleculeType.N2) * extent
    h2 = state.h2 + reaction.coefficient(MoleculeType.H2) * extent
    nh3 = state.nh3 + reaction.coefficient(MoleculeType.NH3) * extent

    return ReactionState(
        n2=max(n2, 0.0),
        h2=max(h2, 0.0),
        nh3=max(nh3, 0.0),
        temperature=state.temperature,
    )


class ReactionIntegrator:
    """Stateful driver around :func:`advance` with a bounded history.

    Consumers read copies through :attr:`state` and :attr:`history`; the
    authoritative state is only replaced by :meth:`step` and the setters.
    """

    def __init__(
        self,
        initial_state: ReactionState | None = None,
        dt: float = DEFAULT_DT,
        history_length: int = constants.HISTORY_LENGTH,
        sample_every: int = constants.HISTORY_SAMPLE_EVERY,
        kinetics: KineticsModel = AMMONIA_KINETICS,
        reaction: Reaction = HABER_BOSCH,
    ) -> None:
        if history_length < 1:
            raise ValueError(f"history_length must be at least 1, got {history_length}")
        if sample_every < 1:
            raise ValueError(f"sample_every must be at least 1, got {sample_every}")

        self.dt = dt
        self.sample_every = sample_every
        self.kinetics = kinetics
        self.reaction = reaction
        self._initial_state = (initial_state or ReactionState()).copy()
        self._state = self._initial_state.copy()
        self._history: Deque[HistoryPoint] = deque(maxlen=history_length)
        self._tick = 0

    @property
    def state(self) -> ReactionState:
        return self._state.copy()

    @property
    def history(self) -> tuple[HistoryPoint, ...]:
        return tuple(self._history)

    @property
    def tick(self) -> int:
        return self._tick

    def rate(self) -> float:
        """Current net rate without advancing the state."""
        return self.kinetics.rate(self._state.concentrations(), self._state.temperature)

    def step(self) -> ReactionState:
        """Advance one tick and return a copy of the new state."""
        self._state = advance(self._state, self.dt, self.kinetics, self.reaction)
        self._tick += 1

        if self._tick % self.sample_every == 0:
            point = HistoryPoint(
                time=self._tick,
                n2=self._state.n2,
                h2=self._state.h2,
                nh3=self._state.nh3,
            )
            self._history.append(point)
            logger.debug("Sampled %s", point)

        return self.state

    def run(self, ticks: int) -> ReactionState:
        for _ in range(ticks):
            self.step()
        return self.state

    def set_n2(self, value: float) -> None:
        self._state.n2 = float(value)

    def set_h2(self, value: float) -> None:
        self._state.h2 = float(value)

    def set_temperature(self, value: float) -> None:
        self._state.temperature = float(value)

    def reset(self, state: ReactionState | None = None) -> None:
        if state is not None:
            self._initial_state = state.copy()
        self._state = self._initial_state.copy()
        self._history.clear()
        self._tick = 0
