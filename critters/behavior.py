"""
Species behavior variants.

Each species contributes two functions:
- adjust_velocity: species-specific steering applied before the speed cap
- advance_phases: animation phase/heading bookkeeping after movement

Dispatch goes through the SPECIES_VARIANTS table keyed on Species, so the
shared motion pipeline (motion.py) never branches on species itself.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict

from .entity import Entity
from .data_types import Species, SpeciesProfile
from .errors import UnknownSpeciesError
from .rng import perturbation, chance
from .spatial import heading_of


VelocityAdjuster = Callable[[Entity, np.ndarray, SpeciesProfile, np.random.Generator, float], np.ndarray]
PhaseAdvancer = Callable[[Entity, SpeciesProfile], None]


@dataclass(frozen=True)
class SpeciesVariant:
    """Behavior policy for one species"""
    adjust_velocity: VelocityAdjuster
    advance_phases: PhaseAdvancer


# ============================================================================
# Fish: smooth, current-like undulation
# ============================================================================

def adjust_fish_velocity(
    entity: Entity,
    velocity: np.ndarray,
    profile: SpeciesProfile,
    rng: np.random.Generator,
    elapsed_ms: float
) -> np.ndarray:
    """
    Layer a slow vertical undulation on top of the shared drift.

    dy += sin(elapsed_ms / timescale) * amplitude

    Args:
        entity: Fish being updated
        velocity: Velocity after turbulence and drift
        profile: Fish profile (undulation parameters)
        rng: Random generator (unused, fish steering is deterministic)
        elapsed_ms: Clock reading for this tick

    Returns:
        Adjusted velocity
    """
    amplitude = profile.param('undulation_amplitude')
    timescale = profile.param('undulation_timescale_ms')

    adjusted = velocity.copy()
    adjusted[1] += math.sin(elapsed_ms / timescale) * amplitude
    return adjusted


def advance_fish_phases(entity: Entity, profile: SpeciesProfile):
    """
    Advance tail/fin phases and smooth the heading.

    current_angle moves a fixed fraction toward atan2(dy, dx) each tick,
    so a sudden reversal turns over several frames instead of snapping.
    """
    entity.tail_phase += profile.param('tail_rate')
    entity.fin_phase += profile.param('fin_rate')

    entity.target_angle = heading_of(entity.velocity)
    smoothing = profile.param('heading_smoothing')
    entity.current_angle += (entity.target_angle - entity.current_angle) * smoothing


# ============================================================================
# Bug: jittery flight with occasional sharp impulses
# ============================================================================

def adjust_bug_velocity(
    entity: Entity,
    velocity: np.ndarray,
    profile: SpeciesProfile,
    rng: np.random.Generator,
    elapsed_ms: float
) -> np.ndarray:
    """With small probability, kick both axes by a uniform impulse"""
    if not chance(rng, profile.param('impulse_chance')):
        return velocity

    return velocity + perturbation(rng, profile.param('impulse_magnitude'))


def advance_bug_phases(entity: Entity, profile: SpeciesProfile):
    entity.wiggle_phase += profile.param('wiggle_rate')
    entity.wing_phase += profile.param('wing_rate')


# ============================================================================
# Bird: sustained glides with occasional course corrections
# ============================================================================

def adjust_bird_velocity(
    entity: Entity,
    velocity: np.ndarray,
    profile: SpeciesProfile,
    rng: np.random.Generator,
    elapsed_ms: float
) -> np.ndarray:
    """
    Ease velocity toward a glide target, re-rolling the target now and then.

    The target is drawn per axis in [-factor * speed_cap, +factor * speed_cap];
    every tick velocity closes a fixed fraction of the gap:
        v += (target - v) * easing

    Args:
        entity: Bird being updated (target_velocity is mutated on re-roll)
        velocity: Velocity after turbulence and drift
        profile: Bird profile (retarget/easing parameters)
        rng: Random generator
        elapsed_ms: Clock reading for this tick (unused)

    Returns:
        Adjusted velocity
    """
    if chance(rng, profile.param('retarget_chance')):
        reach = entity.speed_cap * profile.param('target_speed_factor')
        entity.target_velocity = perturbation(rng, reach)

    easing = profile.param('easing')
    return velocity + (entity.target_velocity - velocity) * easing


def advance_bird_phases(entity: Entity, profile: SpeciesProfile):
    entity.wing_angle += profile.param('wing_rate')
    entity.body_phase += profile.param('body_rate')


# ============================================================================
# Dispatch
# ============================================================================

SPECIES_VARIANTS: Dict[Species, SpeciesVariant] = {
    Species.FISH: SpeciesVariant(adjust_fish_velocity, advance_fish_phases),
    Species.BUG: SpeciesVariant(adjust_bug_velocity, advance_bug_phases),
    Species.BIRD: SpeciesVariant(adjust_bird_velocity, advance_bird_phases),
}


def get_variant(species: Species) -> SpeciesVariant:
    """
    Look up the behavior variant for a species.

    Raises:
        UnknownSpeciesError: no variant registered for this tag
    """
    try:
        return SPECIES_VARIANTS[species]
    except KeyError:
        raise UnknownSpeciesError(f"No behavior variant registered for {species!r}")
