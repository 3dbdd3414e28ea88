"""Tuning constants for the ammonia equilibrium demonstration.

All quantities are in scaled, arbitrary units. The Arrhenius constants fold the
gas constant into the activation energy (R = 1).
"""

from __future__ import annotations

# Reaction: N2 + 3H2 <-> 2NH3 + heat
# Exothermic: forward Ea is lower than reverse Ea, so heating speeds up the
# reverse reaction more and the equilibrium moves left.
K_FWD_PRE = 20.0
EA_FWD = 2.0

K_REV_PRE = 5000.0
EA_REV = 8.0

# Detuned from the stoichiometric 3 and 2 to keep the explicit step smooth.
H2_EXPONENT = 2.5
NH3_EXPONENT = 1.8

HISTORY_LENGTH = 100
HISTORY_SAMPLE_EVERY = 5

BASE_STEP = 0.1
SIMULATION_SPEED = 0.1  # multiplier for reaction steps

PARTICLE_SCALE = 25  # particles per concentration unit
CANVAS_WIDTH = 400
CANVAS_HEIGHT = 300

COLORS = {
    "N2": "#3b82f6",
    "H2": "#94a3b8",
    "NH3": "#ef4444",
    "BG": "#1e293b",
}

# Slider ranges (min, max) enforced at the input boundary.
CONCENTRATION_RANGE = (0.0, 3.0)
TEMPERATURE_RANGE = (0.8, 3.0)

INITIAL_N2 = 1.5
INITIAL_H2 = 1.5
INITIAL_NH3 = 0.5
INITIAL_TEMPERATURE = 1.2

# Display cadence in milliseconds (about 60 Hz).
FRAME_INTERVAL_MS = 16
