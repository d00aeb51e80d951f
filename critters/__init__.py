"""
Critters Ambient Simulation

A deterministic, headless motion core for an ambient scene: a couple of
fish, bugs or birds drift across a viewport, bounce off its edges and leave
fading ripples behind.

Architecture: the simulation is the source of truth. Renderers are consumers
of the per-frame snapshot.
"""

__version__ = "0.1.0"

from .data_types import Species, Viewport, FrameSnapshot
from .simulation import SceneManager, SimulationState
from .errors import (
    CrittersError, DataLoadError, UnknownSpeciesError, SceneSwitchError, ClockError
)

__all__ = [
    "Species",
    "Viewport",
    "FrameSnapshot",
    "SceneManager",
    "SimulationState",
    "CrittersError",
    "DataLoadError",
    "UnknownSpeciesError",
    "SceneSwitchError",
    "ClockError",
]
