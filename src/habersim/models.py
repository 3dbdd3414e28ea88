"""Data structures for species, the reaction and its state."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping

from habersim import constants


class MoleculeType(str, Enum):
    N2 = "N2"
    H2 = "H2"
    NH3 = "NH3"


@dataclass(frozen=True)
class Reaction:
    name: str
    stoichiometry: Mapping[MoleculeType, float]

    def coefficient(self, species: MoleculeType) -> float:
        return self.stoichiometry.get(species, 0.0)

    def extent_bounds(self, concentrations: Mapping[MoleculeType, float]) -> tuple[float, float]:
        """Range of reaction extent that keeps every concentration non-negative.

        The lower bound (reverse direction) is set by the scarcest product,
        the upper bound (forward direction) by the scarcest reactant.
        """
        lower = -math.inf
        upper = math.inf
        for species, coefficient in self.stoichiometry.items():
            available = max(concentrations.get(species, 0.0), 0.0)
            if coefficient < 0:
                upper = min(upper, available / -coefficient)
            elif coefficient > 0:
                lower = max(lower, -available / coefficient)
        return lower, upper


HABER_BOSCH = Reaction(
    name="N2 + 3H2 <-> 2NH3",
    stoichiometry={
        MoleculeType.N2: -1.0,
        MoleculeType.H2: -3.0,
        MoleculeType.NH3: 2.0,
    },
)


@dataclass
class ReactionState:
    """Authoritative chemistry state.

    Attributes:
        n2: Nitrogen concentration (non-negative).
        h2: Hydrogen concentration (non-negative).
        nh3: Ammonia concentration (non-negative).
        temperature: Temperature in scaled units. Must be strictly positive.
    """

    n2: float = constants.INITIAL_N2
    h2: float = constants.INITIAL_H2
    nh3: float = constants.INITIAL_NH3
    temperature: float = constants.INITIAL_TEMPERATURE

    def concentration(self, species: MoleculeType) -> float:
        if species == MoleculeType.N2:
            return self.n2
        if species == MoleculeType.H2:
            return self.h2
        return self.nh3

    def concentrations(self) -> dict[MoleculeType, float]:
        return {species: self.concentration(species) for species in MoleculeType}

    def copy(self) -> "ReactionState":
        return replace(self)

    def as_dict(self) -> dict[str, float]:
        return {
            "n2": self.n2,
            "h2": self.h2,
            "nh3": self.nh3,
            "temperature": self.temperature,
        }


@dataclass(frozen=True)
class HistoryPoint:
    time: int
    n2: float
    h2: float
    nh3: float

    def as_dict(self) -> dict[str, float]:
        return {"time": self.time, "n2": self.n2, "h2": self.h2, "nh3": self.nh3}
