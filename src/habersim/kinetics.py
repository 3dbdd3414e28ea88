"""Kinetics helpers and rate expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol

import numpy as np

from habersim import constants
from habersim.models import MoleculeType


class KineticsModel(Protocol):
    def rate(self, concentrations: Mapping[MoleculeType, float], temperature: float) -> float:
        """Calculate reaction rate given concentrations and temperature."""
        ...


@dataclass(frozen=True)
class ArrheniusKinetics:
    """k = A * exp(-Ea / T), with the gas constant folded into ``Ea``."""

    pre_exponential: float
    activation_energy: float

    def rate_constant(self, temperature: float) -> float:
        return float(self.pre_exponential * np.exp(-self.activation_energy / temperature))


@dataclass(frozen=True)
class PowerLawKinetics:
    arrhenius: ArrheniusKinetics
    exponents: Mapping[MoleculeType, float]

    def rate(self, concentrations: Mapping[MoleculeType, float], temperature: float) -> float:
        k = self.arrhenius.rate_constant(temperature)
        rate = k
        for species, exponent in self.exponents.items():
            # Floating point drift can leave tiny negative values behind.
            base = max(concentrations.get(species, 0.0), 0.0)
            rate *= base ** exponent
        return rate


@dataclass(frozen=True)
class ReversibleKinetics:
    """Net rate of a reversible reaction: forward term minus reverse term.

    Positive values move the system toward products.
    """

    forward: PowerLawKinetics
    reverse: PowerLawKinetics

    def rate(self, concentrations: Mapping[MoleculeType, float], temperature: float) -> float:
        return self.forward.rate(concentrations, temperature) - self.reverse.rate(
            concentrations, temperature
        )

    def rate_constants(self, temperature: float) -> tuple[float, float]:
        return (
            self.forward.arrhenius.rate_constant(temperature),
            self.reverse.arrhenius.rate_constant(temperature),
        )


AMMONIA_KINETICS = ReversibleKinetics(
    forward=PowerLawKinetics(
        arrhenius=ArrheniusKinetics(constants.K_FWD_PRE, constants.EA_FWD),
        exponents={MoleculeType.N2: 1.0, MoleculeType.H2: constants.H2_EXPONENT},
    ),
    reverse=PowerLawKinetics(
        arrhenius=ArrheniusKinetics(constants.K_REV_PRE, constants.EA_REV),
        exponents={MoleculeType.NH3: constants.NH3_EXPONENT},
    ),
)


def rate_constants(temperature: float) -> tuple[float, float]:
    """Return ``(k_fwd, k_rev)`` of the ammonia synthesis at ``temperature``."""
    return AMMONIA_KINETICS.rate_constants(temperature)


def calculate_rate(n2: float, h2: float, nh3: float, temperature: float) -> float:
    """Instantaneous net rate of N2 + 3H2 <-> 2NH3.

    rate = k_f * [N2] * [H2]^2.5 - k_r * [NH3]^1.8

    ``temperature`` must be strictly positive; callers guarantee this at the
    input boundary.
    """
    return AMMONIA_KINETICS.rate(
        {MoleculeType.N2: n2, MoleculeType.H2: h2, MoleculeType.NH3: nh3},
        temperature,
    )
