"""habersim core package."""

from habersim.config import SimulationConfig, load_config
from habersim.integrator import ReactionIntegrator, advance
from habersim.kinetics import (
    ArrheniusKinetics,
    PowerLawKinetics,
    ReversibleKinetics,
    calculate_rate,
)
from habersim.models import HistoryPoint, MoleculeType, Reaction, ReactionState
from habersim.particles import Particle, ParticlePopulation

__all__ = [
    "ArrheniusKinetics",
    "PowerLawKinetics",
    "ReversibleKinetics",
    "calculate_rate",
    "HistoryPoint",
    "MoleculeType",
    "Reaction",
    "ReactionState",
    "ReactionIntegrator",
    "advance",
    "Particle",
    "ParticlePopulation",
    "SimulationConfig",
    "load_config",
]
