"""Particle population that mirrors the chemistry state on screen.

Each species gets ``floor(concentration * scale)`` particles. Reconciliation
keeps existing particles where it can: growing a species spawns new particles
at random, shrinking it keeps the first ``target`` particles of that species.
Motion is purely kinematic. Particles never interact with one another and
bounce elastically off the canvas walls.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import numpy as np

from habersim import constants
from habersim.models import MoleculeType, ReactionState

logger = logging.getLogger(__name__)

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_LENGTH = 9


@dataclass
class Particle:
    id: str
    x: float
    y: float
    vx: float
    vy: float
    species: MoleculeType


def target_counts(
    state: ReactionState, scale: float = constants.PARTICLE_SCALE
) -> dict[MoleculeType, int]:
    """Particle count per species for ``state``."""
    return {
        species: int(math.floor(state.concentration(species) * scale))
        for species in MoleculeType
    }


def spawn_speed(temperature: float) -> float:
    """Velocity spread of a freshly spawned particle."""
    return 0.5 + temperature * 0.2


def _new_id(rng: np.random.Generator) -> str:
    return "".join(_ID_ALPHABET[i] for i in rng.integers(0, len(_ID_ALPHABET), size=_ID_LENGTH))


def create_particle(
    species: MoleculeType,
    temperature: float,
    rng: np.random.Generator,
    width: float = constants.CANVAS_WIDTH,
    height: float = constants.CANVAS_HEIGHT,
) -> Particle:
    spread = spawn_speed(temperature)
    return Particle(
        id=_new_id(rng),
        x=float(rng.random() * width),
        y=float(rng.random() * height),
        vx=float((rng.random() - 0.5) * spread),
        vy=float((rng.random() - 0.5) * spread),
        species=species,
    )


def reconcile(
    pool: Sequence[Particle],
    state: ReactionState,
    rng: np.random.Generator,
    scale: float = constants.PARTICLE_SCALE,
    width: float = constants.CANVAS_WIDTH,
    height: float = constants.CANVAS_HEIGHT,
) -> list[Particle]:
    """Return a new pool whose per-species counts match ``state``.

    Species are handled independently and concatenated in ``MoleculeType``
    order. Surviving particles are the same objects as in ``pool``.
    """
    targets = target_counts(state, scale)
    reconciled: list[Particle] = []

    for species, target in targets.items():
        existing = [p for p in pool if p.species == species]
        diff = target - len(existing)

        if diff > 0:
            reconciled.extend(existing)
            reconciled.extend(
                create_particle(species, state.temperature, rng, width, height)
                for _ in range(diff)
            )
        elif diff < 0:
            reconciled.extend(existing[:target])
        else:
            reconciled.extend(existing)

        if diff:
            logger.debug("%s: %d -> %d particles", species.value, len(existing), target)

    return reconciled


def tick(
    pool: Iterable[Particle],
    temperature: float,
    width: float = constants.CANVAS_WIDTH,
    height: float = constants.CANVAS_HEIGHT,
) -> None:
    """Move every particle in place by one animation frame.

    Speed scales with ``sqrt(temperature)``. A velocity component is reversed
    when its coordinate is outside ``[0, bound]`` and still heading outward;
    positions are never clamped.
    """
    multiplier = math.sqrt(temperature)
    for particle in pool:
        particle.x += particle.vx * multiplier
        particle.y += particle.vy * multiplier

        if (particle.x < 0 and particle.vx < 0) or (particle.x > width and particle.vx > 0):
            particle.vx = -particle.vx
        if (particle.y < 0 and particle.vy < 0) or (particle.y > height and particle.vy > 0):
            particle.vy = -particle.vy


class ParticlePopulation:
    """Owner of the particle pool for one canvas."""

    def __init__(
        self,
        width: float = constants.CANVAS_WIDTH,
        height: float = constants.CANVAS_HEIGHT,
        scale: float = constants.PARTICLE_SCALE,
        rng: np.random.Generator | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if scale <= 0:
            raise ValueError(f"Particle scale must be positive, got {scale}")
        self.width = width
        self.height = height
        self.scale = scale
        self.rng = rng if rng is not None else np.random.default_rng()
        self._pool: list[Particle] = []

    def __len__(self) -> int:
        return len(self._pool)

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._pool)

    def counts(self) -> Mapping[MoleculeType, int]:
        result = {species: 0 for species in MoleculeType}
        for particle in self._pool:
            result[particle.species] += 1
        return result

    def reconcile(self, state: ReactionState) -> None:
        self._pool = reconcile(
            self._pool, state, self.rng, self.scale, self.width, self.height
        )

    def tick(self, temperature: float) -> None:
        tick(self._pool, temperature, self.width, self.height)

    def clear(self) -> None:
        self._pool = []
