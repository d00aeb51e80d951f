"""Shared fixtures for critters tests."""

import numpy as np
import pytest

from critters.loader import load_scene_pack
from critters.entity import Entity
from critters.data_types import Species


class ScriptedRng:
    """
    Stand-in for numpy.random.Generator that replays fixed draws.

    random() pops one value; random(n) pops n values as an array.
    """

    def __init__(self, values):
        self._values = list(values)

    def random(self, size=None):
        if size is None:
            return self._values.pop(0)
        drawn = [self._values.pop(0) for _ in range(size)]
        return np.array(drawn, dtype=np.float64)

    @property
    def remaining(self):
        return len(self._values)


@pytest.fixture
def pack():
    return load_scene_pack()


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def make_entity():
    def _make(species=Species.FISH, position=(50.0, 50.0), velocity=(0.0, 0.0),
              size=40.0, speed_cap=4.0, color='#FF6B6B', instance_id=None):
        species = Species.parse(species)
        return Entity(
            instance_id=instance_id or f"{species.value}-test-00",
            species=species,
            position=np.array(position, dtype=np.float64),
            velocity=np.array(velocity, dtype=np.float64),
            size=size,
            speed_cap=speed_cap,
            color=color
        )
    return _make
