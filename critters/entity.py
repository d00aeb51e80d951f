"""
Entity runtime representation.

Entities are spawned from species profiles when a scene is selected.
Each entity has a unique instance_id, 2D position and velocity, a fixed
size/speed cap/color, and species-specific animation phases.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict

from .data_types import Species, EntityPose
from .spatial import heading_of


# Phase fields reported per species (rendering only, never read by motion)
PHASE_FIELDS = {
    Species.FISH: ('tail_phase', 'fin_phase', 'target_angle', 'current_angle'),
    Species.BUG: ('wiggle_phase', 'wing_phase'),
    Species.BIRD: ('wing_angle', 'body_phase'),
}


@dataclass
class Entity:
    """
    Runtime entity in simulation.

    Attributes:
        instance_id: Unique identifier (format: "{species}-{generation}-{index:02d}")
        species: Species tag, selects the behavior variant
        position: 2D position [x, y] in viewport pixels
        velocity: 2D velocity [dx, dy] in pixels per tick
        size: Body size in pixels
        speed_cap: Maximum velocity magnitude
        color: Hex color tag from the scene palette
        last_position: Position at the start of the latest tick
        target_velocity: Bird glide target (eased toward every tick)
    """
    instance_id: str
    species: Species
    position: np.ndarray  # [x, y] float64
    velocity: np.ndarray  # [dx, dy] float64
    size: float
    speed_cap: float
    color: str
    last_position: np.ndarray = None
    target_velocity: np.ndarray = None

    # Fish
    tail_phase: float = 0.0
    fin_phase: float = 0.0
    target_angle: float = 0.0
    current_angle: float = 0.0

    # Bug
    wiggle_phase: float = 0.0
    wing_phase: float = 0.0

    # Bird
    wing_angle: float = 0.0
    body_phase: float = 0.0

    def __post_init__(self):
        """Ensure vectors are float64 arrays, initialize defaults"""
        self.species = Species.parse(self.species)
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)

        if self.last_position is None:
            self.last_position = self.position.copy()
        else:
            self.last_position = np.array(self.last_position, dtype=np.float64)

        # Birds start gliding along their spawn velocity
        if self.target_velocity is None:
            self.target_velocity = self.velocity.copy()
        else:
            self.target_velocity = np.array(self.target_velocity, dtype=np.float64)

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    @property
    def heading(self) -> float:
        """
        Render orientation in radians.

        Fish turn smoothly (current_angle); bugs and birds face their
        instantaneous velocity.
        """
        if self.species is Species.FISH:
            return self.current_angle
        return heading_of(self.velocity)

    def phases(self) -> Dict[str, float]:
        """Species-specific phase fields by name"""
        return {name: getattr(self, name) for name in PHASE_FIELDS[self.species]}

    def to_pose(self) -> EntityPose:
        """Immutable view of this entity for the renderer"""
        return EntityPose(
            instance_id=self.instance_id,
            species=self.species,
            position=(float(self.position[0]), float(self.position[1])),
            velocity=(float(self.velocity[0]), float(self.velocity[1])),
            size=self.size,
            color=self.color,
            heading=self.heading,
            phases=self.phases(),
        )

    def to_dict(self) -> dict:
        """
        Serialize entity to JSON-compatible dict.

        Returns:
            Dict with all entity fields
        """
        data = {
            'instance_id': self.instance_id,
            'species': self.species.value,
            'position': self.position.tolist(),
            'last_position': self.last_position.tolist(),
            'velocity': self.velocity.tolist(),
            'size': self.size,
            'speed_cap': self.speed_cap,
            'color': self.color,
        }
        data.update(self.phases())
        if self.species is Species.BIRD:
            data['target_velocity'] = self.target_velocity.tolist()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Entity':
        """
        Deserialize entity from dict.

        Args:
            data: Dict with entity fields

        Returns:
            Entity instance
        """
        entity = cls(
            instance_id=data['instance_id'],
            species=data['species'],
            position=data['position'],
            velocity=data['velocity'],
            size=data['size'],
            speed_cap=data['speed_cap'],
            color=data['color'],
            last_position=data.get('last_position'),
            target_velocity=data.get('target_velocity'),
        )
        for name in PHASE_FIELDS[entity.species]:
            if name in data:
                setattr(entity, name, float(data[name]))
        return entity
