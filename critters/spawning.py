"""
Entity spawning system.

Spawns a scene's population from its species profile with deterministic,
per-entity seeds: position uniform over the viewport, size and speed cap
uniform in the profile ranges, color from the palette.
"""

import numpy as np
from typing import List, Sequence

from .entity import Entity
from .data_types import SpeciesProfile, Viewport
from .rng import make_seed, make_rng, uniform_between, perturbation, choose
from .constants import INITIAL_SPEED_FRACTION


def spawn_entities(
    profile: SpeciesProfile,
    viewport: Viewport,
    count: int,
    palette: Sequence[str],
    world_seed: int,
    generation: int
) -> List[Entity]:
    """
    Spawn a fresh population of one species.

    Args:
        profile: Species profile with size/speed ranges
        viewport: Bounds for initial positions
        count: Number of entities to spawn
        palette: Colors to draw from
        world_seed: World generation seed
        generation: Scene selection counter (distinct populations per switch)

    Returns:
        List of spawned Entity instances
    """
    species = profile.species
    entities = []

    for i in range(count):
        # Deterministic seed per entity
        entity_seed = make_seed(world_seed, generation, species.value, i)
        rng = make_rng(entity_seed)

        instance_id = f"{species.value}-{generation}-{i:02d}"

        position = _spawn_uniform(rng, viewport)
        size = uniform_between(rng, profile.size_range['min'], profile.size_range['max'])
        speed_cap = uniform_between(rng, profile.speed_range['min'], profile.speed_range['max'])
        color = choose(rng, palette)

        # Initial velocity: per-axis uniform drift, half the speed cap at most
        velocity = perturbation(rng, speed_cap * INITIAL_SPEED_FRACTION)

        entities.append(Entity(
            instance_id=instance_id,
            species=species,
            position=position,
            velocity=velocity,
            size=size,
            speed_cap=speed_cap,
            color=color
        ))

    return entities


def _spawn_uniform(rng: np.random.Generator, viewport: Viewport) -> np.ndarray:
    """
    Random position uniformly within the viewport rectangle.

    A degenerate axis (extent <= 0) places the entity at 0 on that axis.
    """
    width = max(viewport.width, 0.0)
    height = max(viewport.height, 0.0)
    return np.array([rng.random() * width, rng.random() * height], dtype=np.float64)
