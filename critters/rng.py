"""
Deterministic RNG utilities for the critters simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(world_seed, generation, species, entity_index, stream_name). All randomness
uses numpy.random.Generator(PCG64) so a run is reproducible from its seed.

The helpers below draw bounded scalars from a generator passed in; they keep
no state of their own.
"""

import hashlib
import numpy as np
from typing import Any, Sequence


def make_seed(*components: Any) -> int:
    """
    Fold seed components into a stable 64-bit integer.

    The components are joined with ':' and hashed, so
    make_seed(world_seed, generation, 'fish', 0) always names the same
    stream and changing any component gives an unrelated one.
    """
    digest = hashlib.sha256(":".join(map(str, components)).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big")


def make_rng(seed: int) -> np.random.Generator:
    """Create a PCG64 generator from a seed produced by make_seed()"""
    return np.random.Generator(np.random.PCG64(seed))


def perturbation(rng: np.random.Generator, amplitude: float, size: int = 2) -> np.ndarray:
    """
    Draw independent uniform deltas in [-amplitude, +amplitude).

    Args:
        rng: Random generator
        amplitude: Half-width of the range
        size: Number of axes

    Returns:
        Array of deltas, one per axis
    """
    return (rng.random(size) - 0.5) * (2.0 * amplitude)


def uniform_between(rng: np.random.Generator, low: float, high: float) -> float:
    """Draw a single float in [low, high)"""
    return float(low + rng.random() * (high - low))


def chance(rng: np.random.Generator, probability: float) -> bool:
    """Return True with the given probability (one draw per call)"""
    return bool(rng.random() < probability)


def choose(rng: np.random.Generator, options: Sequence[Any]) -> Any:
    """
    Pick one element uniformly from a non-empty sequence.

    Args:
        rng: Random generator
        options: Candidates (e.g., palette colors)

    Returns:
        Chosen element
    """
    if not options:
        raise ValueError("cannot choose from an empty sequence")
    index = int(rng.random() * len(options))
    return options[min(index, len(options) - 1)]
