"""GUI package for habersim."""

from habersim.gui.simulation import Scheduler, SimulationSession

__all__ = ["Scheduler", "SimulationSession"]
