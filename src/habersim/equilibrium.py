"""Equilibrium diagnostics for the ammonia reaction.

These helpers answer "where is the system heading?" without stepping it. They
use the same detuned rate law as the integrator, so the predicted equilibrium
is the point the simulation actually settles at (for step sizes where the
explicit scheme is stable).
"""

from __future__ import annotations

import math

import numpy as np
from scipy.optimize import brentq

from habersim import constants
from habersim.kinetics import AMMONIA_KINETICS, KineticsModel
from habersim.models import HABER_BOSCH, MoleculeType, ReactionState

FORWARD = "forward"
REVERSE = "reverse"
AT_EQUILIBRIUM = "equilibrium"


def equilibrium_constant(temperature: float) -> float:
    """K = k_fwd / k_rev. Decreases with temperature (exothermic reaction).

    Evaluated in closed form so that a reverse constant too small to represent
    gives ``inf`` instead of a division by zero.
    """
    with np.errstate(over="ignore"):
        exponent = np.exp((constants.EA_REV - constants.EA_FWD) / temperature)
    return float(constants.K_FWD_PRE / constants.K_REV_PRE * exponent)


def reaction_quotient(state: ReactionState) -> float:
    """Q = [NH3]^1.8 / ([N2] * [H2]^2.5); ``inf`` with no reactants present."""
    numerator = max(state.nh3, 0.0) ** constants.NH3_EXPONENT
    denominator = max(state.n2, 0.0) * max(state.h2, 0.0) ** constants.H2_EXPONENT
    if denominator == 0.0:
        return math.inf if numerator > 0.0 else math.nan
    return numerator / denominator


def shift_direction(
    state: ReactionState,
    kinetics: KineticsModel = AMMONIA_KINETICS,
    tolerance: float = 1e-6,
) -> str:
    """Which way the net reaction currently runs."""
    rate = kinetics.rate(state.concentrations(), state.temperature)
    if rate > tolerance:
        return FORWARD
    if rate < -tolerance:
        return REVERSE
    return AT_EQUILIBRIUM


def _state_at(state: ReactionState, extent: float) -> ReactionState:
    return ReactionState(
        n2=state.n2 + HABER_BOSCH.coefficient(MoleculeType.N2) * extent,
        h2=state.h2 + HABER_BOSCH.coefficient(MoleculeType.H2) * extent,
        nh3=state.nh3 + HABER_BOSCH.coefficient(MoleculeType.NH3) * extent,
        temperature=state.temperature,
    )


def extent_bounds(state: ReactionState) -> tuple[float, float]:
    """Range of reaction extent that keeps every concentration non-negative."""
    return HABER_BOSCH.extent_bounds(state.concentrations())


def equilibrium_extent(
    state: ReactionState,
    kinetics: KineticsModel = AMMONIA_KINETICS,
    xtol: float = 1e-12,
) -> float:
    """Extent of reaction from ``state`` at which the net rate vanishes.

    The net rate is non-negative with no ammonia left and non-positive with a
    reactant exhausted, so the root is bracketed by :func:`extent_bounds`.
    """
    lower, upper = extent_bounds(state)
    if upper <= lower:
        return lower

    def net_rate(extent: float) -> float:
        shifted = _state_at(state, extent)
        return kinetics.rate(shifted.concentrations(), shifted.temperature)

    return float(brentq(net_rate, lower, upper, xtol=xtol))


def equilibrium_state(
    state: ReactionState, kinetics: KineticsModel = AMMONIA_KINETICS
) -> ReactionState:
    """Composition the system relaxes to at the current temperature."""
    shifted = _state_at(state, equilibrium_extent(state, kinetics))
    return ReactionState(
        n2=max(shifted.n2, 0.0),
        h2=max(shifted.h2, 0.0),
        nh3=max(shifted.nh3, 0.0),
        temperature=shifted.temperature,
    )
