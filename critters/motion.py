"""
Entity motion model shared by all species.

One call to step_entity() advances one entity by one tick:

1. Record last_position
2. Turbulence: uniform per-axis delta in [-turbulence, +turbulence]
3. Global drift: sin/cos of elapsed time, shared by the whole population
4. Species variant velocity adjustment (behavior.py)
5. Speed cap by uniform rescaling (direction preserved)
6. Integrate position
7. Reflect off viewport edges (exact sign flip, clamp to bound)
8. Species phase advancement (uses the post-reflection velocity)
9. Ripple request with small fixed probability

The random draws happen in a fixed order per entity, so a seeded generator
and a fixed elapsed-time sequence reproduce a run bit for bit.
"""

import math
import numpy as np
from typing import Optional, Tuple

from .entity import Entity
from .data_types import MotionConfig, SpeciesProfile, Viewport
from .behavior import get_variant
from .rng import perturbation, chance
from .spatial import clamp_speed, reflect_in_viewport


def global_drift(elapsed_ms: float, motion: MotionConfig) -> np.ndarray:
    """
    Shared slowly-varying current at a given time.

    Returns:
        Velocity delta [sin(t / Tx) * A, cos(t / Ty) * A]
    """
    return np.array([
        math.sin(elapsed_ms / motion.drift_x_timescale_ms) * motion.drift_amplitude,
        math.cos(elapsed_ms / motion.drift_y_timescale_ms) * motion.drift_amplitude,
    ], dtype=np.float64)


def step_entity(
    entity: Entity,
    profile: SpeciesProfile,
    viewport: Viewport,
    elapsed_ms: float,
    rng: np.random.Generator,
    motion: MotionConfig,
    ripple_chance: float
) -> Optional[Tuple[float, float]]:
    """
    Advance one entity by one tick (mutates entity in place).

    Args:
        entity: Entity to move
        profile: Profile of the entity's species
        viewport: Current drawable bounds
        elapsed_ms: Clock reading for this tick
        rng: Motion random generator
        motion: Shared motion parameters
        ripple_chance: Probability of requesting a ripple this tick

    Returns:
        (x, y) of a requested ripple, or None
    """
    variant = get_variant(entity.species)

    entity.last_position = entity.position.copy()

    velocity = entity.velocity + perturbation(rng, motion.turbulence)
    velocity = velocity + global_drift(elapsed_ms, motion)
    velocity = variant.adjust_velocity(entity, velocity, profile, rng, elapsed_ms)
    velocity = clamp_speed(velocity, entity.speed_cap)

    position = entity.position + velocity
    position, velocity, _ = reflect_in_viewport(position, velocity, viewport.width, viewport.height)

    entity.position = position
    entity.velocity = velocity

    variant.advance_phases(entity, profile)

    if chance(rng, ripple_chance):
        return float(position[0]), float(position[1])
    return None
