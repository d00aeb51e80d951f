"""
Test species behavior variants.

Verifies:
- Fish undulation and heading smoothing (geometric convergence, no snapping)
- Bug impulses fire only on a successful chance draw
- Bird target re-roll and easing toward the target
- Phase accumulators advance by the configured rates
- Dispatch table rejects unknown species
"""

import math
import numpy as np
import pytest

from critters.behavior import (
    adjust_fish_velocity, advance_fish_phases,
    adjust_bug_velocity, advance_bug_phases,
    adjust_bird_velocity, advance_bird_phases,
    get_variant, SPECIES_VARIANTS,
)
from critters.data_types import Species
from critters.errors import UnknownSpeciesError


def test_fish_undulation_peaks_on_dy_only(pack, make_entity, scripted_rng):
    fish = make_entity(Species.FISH)
    profile = pack.profile(Species.FISH)

    elapsed = 1500.0 * math.pi / 2.0  # sin(t / 1500) == 1
    adjusted = adjust_fish_velocity(fish, np.array([1.0, 0.0]), profile, scripted_rng([]), elapsed)

    assert np.isclose(adjusted[0], 1.0)
    assert np.isclose(adjusted[1], 0.15)


def test_fish_heading_smoothing_after_reversal(pack, make_entity):
    """A 180 degree reversal closes 10% of the remaining gap per tick"""
    fish = make_entity(Species.FISH, velocity=(-1.0, 0.0))
    profile = pack.profile(Species.FISH)
    fish.current_angle = 0.0

    advance_fish_phases(fish, profile)
    assert np.isclose(fish.target_angle, math.pi)
    assert np.isclose(fish.current_angle, 0.1 * math.pi)
    assert fish.current_angle < fish.target_angle

    for k in range(2, 30):
        advance_fish_phases(fish, profile)
        remaining = fish.target_angle - fish.current_angle
        assert np.isclose(remaining, math.pi * 0.9 ** k)
        assert remaining > 0.0


def test_fish_phase_rates(pack, make_entity):
    fish = make_entity(Species.FISH, velocity=(1.0, 0.0))
    profile = pack.profile(Species.FISH)

    for _ in range(10):
        advance_fish_phases(fish, profile)

    assert np.isclose(fish.tail_phase, 1.0)
    assert np.isclose(fish.fin_phase, 1.5)


def test_bug_impulse_on_successful_draw(pack, make_entity, scripted_rng):
    bug = make_entity(Species.BUG)
    profile = pack.profile(Species.BUG)

    # chance draw 0.01 < 0.05, then impulse draws map to (+0.5, -0.5)
    rng = scripted_rng([0.01, 0.75, 0.25])
    adjusted = adjust_bug_velocity(bug, np.array([1.0, 1.0]), profile, rng, 0.0)

    assert np.allclose(adjusted, [1.5, 0.5])
    assert rng.remaining == 0


def test_bug_no_impulse_on_failed_draw(pack, make_entity, scripted_rng):
    bug = make_entity(Species.BUG)
    profile = pack.profile(Species.BUG)

    rng = scripted_rng([0.9])
    adjusted = adjust_bug_velocity(bug, np.array([1.0, -2.0]), profile, rng, 0.0)

    assert np.allclose(adjusted, [1.0, -2.0])
    assert rng.remaining == 0


def test_bug_impulse_bounded(pack, make_entity):
    bug = make_entity(Species.BUG)
    profile = pack.profile(Species.BUG)
    rng = np.random.Generator(np.random.PCG64(7))

    base = np.array([0.0, 0.0])
    for _ in range(500):
        adjusted = adjust_bug_velocity(bug, base, profile, rng, 0.0)
        assert np.all(np.abs(adjusted) <= 1.0)


def test_bug_phase_rates(pack, make_entity):
    bug = make_entity(Species.BUG)
    profile = pack.profile(Species.BUG)

    for _ in range(5):
        advance_bug_phases(bug, profile)

    assert np.isclose(bug.wiggle_phase, 1.0)
    assert np.isclose(bug.wing_phase, 1.5)


def test_bird_retarget_and_ease(pack, make_entity, scripted_rng):
    bird = make_entity(Species.BIRD, speed_cap=4.0)
    profile = pack.profile(Species.BIRD)

    # chance draw 0.0 < 0.02 re-rolls target; draws map to (+2, -2) with cap 4
    rng = scripted_rng([0.0, 0.75, 0.25])
    adjusted = adjust_bird_velocity(bird, np.array([0.0, 0.0]), profile, rng, 0.0)

    assert np.allclose(bird.target_velocity, [2.0, -2.0])
    assert np.allclose(adjusted, [0.2, -0.2])


def test_bird_eases_toward_spawn_target(pack, make_entity, scripted_rng):
    """Without a re-roll the target is the spawn velocity"""
    bird = make_entity(Species.BIRD, velocity=(1.0, 0.0))
    profile = pack.profile(Species.BIRD)

    velocity = np.array([0.0, 0.0])
    for _ in range(3):
        velocity = adjust_bird_velocity(bird, velocity, profile, scripted_rng([0.5]), 0.0)

    # 1 - 0.9^3 of the gap closed
    assert np.isclose(velocity[0], 1.0 - 0.9 ** 3)
    assert np.isclose(velocity[1], 0.0)


def test_bird_target_within_speed_cap(pack, make_entity):
    bird = make_entity(Species.BIRD, speed_cap=3.0)
    profile = pack.profile(Species.BIRD)
    rng = np.random.Generator(np.random.PCG64(11))

    velocity = np.array([0.0, 0.0])
    for _ in range(2000):
        velocity = adjust_bird_velocity(bird, velocity, profile, rng, 0.0)
        assert np.all(np.abs(bird.target_velocity) <= 3.0)


def test_bird_phase_rates(pack, make_entity):
    bird = make_entity(Species.BIRD)
    profile = pack.profile(Species.BIRD)

    for _ in range(10):
        advance_bird_phases(bird, profile)

    assert np.isclose(bird.wing_angle, 2.0)
    assert np.isclose(bird.body_phase, 1.0)


def test_variant_table_covers_every_species():
    for species in Species:
        assert get_variant(species) is SPECIES_VARIANTS[species]


def test_unknown_variant_rejected():
    with pytest.raises(UnknownSpeciesError):
        get_variant("lizard")
