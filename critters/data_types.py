"""
Data types mirroring the YAML scene pack and the per-frame snapshot.

Config dataclasses are populated by loader.py from YAML files.
Snapshot dataclasses are produced by the scene manager for the renderer.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Tuple
from enum import Enum

from .errors import UnknownSpeciesError
from . import constants


# ============================================================================
# Species
# ============================================================================

class Species(str, Enum):
    """Creature kind; selects the behavior variant and the scene"""
    FISH = 'fish'
    BUG = 'bug'
    BIRD = 'bird'

    @classmethod
    def parse(cls, value: Any) -> 'Species':
        """
        Resolve a species selector.

        Accepts a Species, its value, or the plural scene keys
        ('bugs', 'birds'). Matching is case-insensitive.

        Raises:
            UnknownSpeciesError: selector is not one of the supported species
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            key = value.strip().lower()
            key = _SCENE_ALIASES.get(key, key)
            for species in cls:
                if species.value == key:
                    return species

        raise UnknownSpeciesError(
            f"Unknown species {value!r} (expected one of: "
            f"{', '.join(s.value for s in cls)})"
        )


_SCENE_ALIASES = {
    'bugs': 'bug',
    'birds': 'bird',
}


# ============================================================================
# Scene Pack Definition
# ============================================================================

@dataclass
class SpeciesProfile:
    """Spawning ranges and behavior tuning for one species"""
    species: Species
    name: str
    size_range: Dict[str, float]  # {min, max}
    speed_range: Dict[str, float]  # {min, max}
    parameters: Dict[str, float] = field(default_factory=dict)
    background: Optional[str] = None  # Scene backdrop hint for the renderer
    description: Optional[str] = None

    def param(self, key: str) -> float:
        """Behavior parameter with fallback to the species defaults"""
        if key in self.parameters:
            return self.parameters[key]
        return constants.SPECIES_PARAMETER_DEFAULTS[self.species.value][key]


@dataclass
class MotionConfig:
    """Shared motion applied to every species"""
    turbulence: float = constants.TURBULENCE_DEFAULT
    drift_amplitude: float = constants.DRIFT_AMPLITUDE_DEFAULT
    drift_x_timescale_ms: float = constants.DRIFT_X_TIMESCALE_MS
    drift_y_timescale_ms: float = constants.DRIFT_Y_TIMESCALE_MS


@dataclass
class RippleConfig:
    """Ripple spawn and decay parameters"""
    spawn_chance: float = constants.RIPPLE_SPAWN_CHANCE
    initial_alpha: float = constants.RIPPLE_INITIAL_ALPHA
    growth_per_tick: float = constants.RIPPLE_GROWTH_PER_TICK
    fade_per_tick: float = constants.RIPPLE_FADE_PER_TICK


@dataclass
class SimulationConfig:
    """Scene-level defaults"""
    entity_count: int = constants.ENTITY_COUNT_DEFAULT
    palette: List[str] = field(default_factory=lambda: list(constants.PALETTE_DEFAULT))
    initial_species: str = constants.INITIAL_SPECIES_DEFAULT
    seed: int = constants.SEED_DEFAULT
    frame_ms: float = constants.FRAME_MS_DEFAULT
    max_ripples: Optional[int] = constants.MAX_RIPPLES_DEFAULT


@dataclass
class ScenePack:
    """Complete scene pack"""
    simulation: SimulationConfig
    motion: MotionConfig
    ripples: RippleConfig
    species: Dict[Species, SpeciesProfile]
    description: Optional[str] = None

    def profile(self, species: Species) -> SpeciesProfile:
        """Profile for a species; raises UnknownSpeciesError if missing"""
        try:
            return self.species[species]
        except KeyError:
            raise UnknownSpeciesError(f"Scene pack has no profile for {species.value!r}")


# ============================================================================
# Viewport
# ============================================================================

@dataclass(frozen=True)
class Viewport:
    """Drawable area; entities live in [0, width] x [0, height]"""
    width: float
    height: float

    @classmethod
    def coerce(cls, value: Any) -> 'Viewport':
        """Accept a Viewport or a (width, height) pair"""
        if isinstance(value, cls):
            return value
        width, height = value
        return cls(float(width), float(height))


# ============================================================================
# Frame Snapshot (renderer-facing)
# ============================================================================

@dataclass
class EntityPose:
    """Pose and animation phases of one entity at the end of a tick"""
    instance_id: str
    species: Species
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    size: float
    color: str
    heading: float
    phases: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with builtin types only (no numpy scalars)"""
        return {
            'instance_id': self.instance_id,
            'species': self.species.value,
            'position': [float(v) for v in self.position],
            'velocity': [float(v) for v in self.velocity],
            'size': float(self.size),
            'color': self.color,
            'heading': float(self.heading),
            'phases': {name: float(value) for name, value in self.phases.items()},
        }


@dataclass
class RippleMarker:
    """A ripple as the renderer sees it"""
    center: Tuple[float, float]
    radius: float
    alpha: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'center': [float(v) for v in self.center],
            'radius': float(self.radius),
            'alpha': float(self.alpha),
        }


@dataclass
class FrameSnapshot:
    """Everything the renderer needs to draw one frame"""
    tick_count: int
    elapsed_ms: float
    species: Species
    viewport: Viewport
    entities: List[EntityPose]
    ripples: List[RippleMarker]
    background: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to dict.
        Calls to_dict() on each pose and ripple, flattens the viewport.
        """
        return {
            'tick_count': int(self.tick_count),
            'elapsed_ms': float(self.elapsed_ms),
            'species': self.species.value,
            'viewport': [float(self.viewport.width), float(self.viewport.height)],
            'background': self.background,
            'entities': [pose.to_dict() for pose in self.entities],
            'ripples': [ripple.to_dict() for ripple in self.ripples],
        }
