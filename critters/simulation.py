"""
Critters simulation kernel.

Owns the scene state (active species, entity population, ripple field) and
advances it one tick per animation frame.

The state lives in an explicit SimulationState value. The module-level
functions (create_state, switch_scene, advance_state) operate on that value;
SceneManager owns one state together with its clock, RNG and viewport and
serializes scene switches against ticks.
"""

import logging
import numpy as np
import os
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Deque, List, Optional

from .entity import Entity
from .data_types import Species, ScenePack, Viewport, FrameSnapshot
from .ripples import RippleField
from .spawning import spawn_entities
from .motion import step_entity
from .clock import SimulationClock
from .loader import load_scene_pack
from .rng import make_seed, make_rng
from .errors import SceneSwitchError
from .constants import TICK_TIME_WINDOW

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """
    Everything that changes between frames.

    Invariant: every entity has species == active_species.
    """
    active_species: Species
    entities: List[Entity] = field(default_factory=list)
    ripples: RippleField = field(default_factory=RippleField)
    generation: int = 0


def switch_scene(
    state: SimulationState,
    species: Any,
    pack: ScenePack,
    viewport: Viewport,
    world_seed: int
) -> SimulationState:
    """
    Replace the population with a fresh one of the requested species.

    The new population is built before anything is assigned, then the
    species, entities and an empty ripple field are swapped in together.
    An invalid selector raises before the state is touched.

    Args:
        state: State to update in place
        species: Species selector (Species, 'fish', 'bugs', ...)
        pack: Scene pack with profiles and simulation defaults
        viewport: Bounds for initial positions
        world_seed: World generation seed

    Returns:
        The same state object, now holding the new scene

    Raises:
        UnknownSpeciesError: selector outside the supported set
    """
    species = Species.parse(species)
    profile = pack.profile(species)
    generation = state.generation + 1

    entities = spawn_entities(
        profile=profile,
        viewport=viewport,
        count=pack.simulation.entity_count,
        palette=pack.simulation.palette,
        world_seed=world_seed,
        generation=generation
    )
    ripples = RippleField(pack.ripples, max_ripples=pack.simulation.max_ripples)

    state.active_species = species
    state.entities = entities
    state.ripples = ripples
    state.generation = generation

    return state


def create_state(species: Any, pack: ScenePack, viewport: Viewport, world_seed: int) -> SimulationState:
    """Build the initial state with its first scene already spawned"""
    species = Species.parse(species)
    state = SimulationState(
        active_species=species,
        ripples=RippleField(pack.ripples, max_ripples=pack.simulation.max_ripples)
    )
    return switch_scene(state, species, pack, viewport, world_seed)


def advance_state(
    state: SimulationState,
    pack: ScenePack,
    viewport: Viewport,
    elapsed_ms: float,
    rng: np.random.Generator
) -> int:
    """
    Advance every entity and the ripple field by one tick.

    Existing ripples age first; ripples requested by this tick's movement
    are added afterwards at radius 0.

    Args:
        state: State to advance in place
        pack: Scene pack (motion/ripple tuning, species profiles)
        viewport: Current drawable bounds
        elapsed_ms: Clock reading for this tick
        rng: Motion random generator

    Returns:
        Number of ripples spawned this tick
    """
    state.ripples.tick()

    spawned = 0
    for entity in state.entities:
        request = step_entity(
            entity,
            profile=pack.profile(entity.species),
            viewport=viewport,
            elapsed_ms=elapsed_ms,
            rng=rng,
            motion=pack.motion,
            ripple_chance=pack.ripples.spawn_chance
        )
        if request is not None:
            state.ripples.spawn(*request)
            spawned += 1

    return spawned


class SceneManager:
    """
    Main simulation class for the ambient scene.

    Manages scene lifecycle and the tick loop. One tick() per animation
    frame; scene switches happen between ticks only.
    """

    def __init__(
        self,
        viewport: Any,
        pack: Optional[ScenePack] = None,
        config_path: Optional[Path] = None,
        seed: Optional[int] = None,
        initial_species: Any = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[SimulationClock] = None
    ):
        """
        Initialize simulation and spawn the initial scene.

        Args:
            viewport: Viewport or (width, height)
            pack: Preloaded scene pack (overrides config_path)
            config_path: YAML scene pack path (defaults to the bundled pack)
            seed: World seed (defaults to the pack's seed)
            initial_species: First scene (defaults to the pack's initial_species)
            rng: Motion generator to use instead of one derived from the seed
            clock: Clock to use instead of a fixed-step one from the pack
        """
        self.pack: ScenePack = pack if pack is not None else load_scene_pack(config_path)
        self.viewport: Viewport = Viewport.coerce(viewport)
        self.seed: int = self.pack.simulation.seed if seed is None else seed

        self.rng = rng if rng is not None else make_rng(make_seed(self.seed, "motion"))
        self.clock = clock if clock is not None else SimulationClock(frame_ms=self.pack.simulation.frame_ms)

        self._in_tick: bool = False
        self._pending_species: Optional[Species] = None
        self._last_snapshot: Optional[FrameSnapshot] = None

        # Wall-clock seconds of the most recent ticks
        self._tick_durations: Deque[float] = deque(maxlen=TICK_TIME_WINDOW)

        if initial_species is None:
            initial_species = self.pack.simulation.initial_species
        self.state: SimulationState = create_state(initial_species, self.pack, self.viewport, self.seed)

        logger.info(
            "Simulation initialized: %s scene, %d entities, viewport=%gx%g, seed=%s",
            self.state.active_species.value, len(self.state.entities),
            self.viewport.width, self.viewport.height, self.seed
        )

    # ------------------------------------------------------------------
    # Scene lifecycle
    # ------------------------------------------------------------------

    @property
    def active_species(self) -> Species:
        return self.state.active_species

    @property
    def entities(self) -> List[Entity]:
        return self.state.entities

    @property
    def ripples(self) -> RippleField:
        return self.state.ripples

    @property
    def tick_count(self) -> int:
        return self.clock.tick_number

    def select_scene(self, species: Any) -> SimulationState:
        """
        Switch scenes immediately.

        Clears entities and ripples and spawns entity_count entities of the
        requested species. Cancels any deferred request.

        Raises:
            UnknownSpeciesError: selector outside the supported set
            SceneSwitchError: called while a tick is in progress
        """
        if self._in_tick:
            raise SceneSwitchError("Scene switch requested during a tick; use request_scene()")

        previous = self.state.active_species
        switch_scene(self.state, species, self.pack, self.viewport, self.seed)
        self._pending_species = None

        logger.info(
            "Scene switched %s -> %s (generation %d, %d entities)",
            previous.value, self.state.active_species.value,
            self.state.generation, len(self.state.entities)
        )
        return self.state

    def request_scene(self, species: Any) -> Species:
        """
        Schedule a scene switch for the start of the next tick.

        The selector is validated now, so a bad value fails at the call site.

        Returns:
            The parsed species
        """
        parsed = Species.parse(species)
        self.pack.profile(parsed)
        self._pending_species = parsed
        logger.debug("Scene %s requested for next frame", parsed.value)
        return parsed

    @property
    def pending_species(self) -> Optional[Species]:
        return self._pending_species

    def resize(self, viewport: Any):
        """Update the viewport used by reflection and future spawns"""
        self.viewport = Viewport.coerce(viewport)
        logger.debug("Viewport resized to %gx%g", self.viewport.width, self.viewport.height)

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    def tick(self, viewport: Any = None, elapsed_ms: Optional[float] = None) -> FrameSnapshot:
        """
        Advance simulation by one frame.

        Args:
            viewport: Current viewport (None keeps the last one)
            elapsed_ms: Monotonic clock reading (None steps one fixed frame)

        Returns:
            Snapshot of the frame for the renderer
        """
        start_time = time.perf_counter()

        resized = Viewport.coerce(viewport) if viewport is not None else None

        # A rejected clock reading leaves the scene and any pending request as they were
        now_ms = self.clock.advance(elapsed_ms)

        if resized is not None:
            self.resize(resized)

        if self._pending_species is not None:
            self.select_scene(self._pending_species)

        self._in_tick = True
        try:
            advance_state(self.state, self.pack, self.viewport, now_ms, self.rng)
        finally:
            self._in_tick = False

        snapshot = self.get_snapshot()
        self._last_snapshot = snapshot

        self._tick_durations.append(time.perf_counter() - start_time)

        # Debug invariant check (zero perf impact when env var not set)
        if os.getenv('CRITTERS_DEBUG_INVARIANTS') == '1':
            self._check_invariants()

        return snapshot

    def _check_invariants(self):
        """Assert the per-tick invariants hold for every live entity/ripple"""
        for entity in self.state.entities:
            assert entity.species is self.state.active_species, \
                f"{entity.instance_id} is {entity.species.value} in a {self.state.active_species.value} scene"
            assert entity.speed <= entity.speed_cap + 1e-9, \
                f"{entity.instance_id} speed {entity.speed:.4f} exceeds cap {entity.speed_cap:.4f}"
        for ripple in self.state.ripples:
            assert ripple.alpha > 0.0, f"dead ripple still live (alpha={ripple.alpha})"

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def get_snapshot(self) -> FrameSnapshot:
        """
        Get renderer snapshot of the current state.

        Returns:
            FrameSnapshot with entity poses and ripple markers
        """
        return FrameSnapshot(
            tick_count=self.clock.tick_number,
            elapsed_ms=self.clock.elapsed_ms,
            species=self.state.active_species,
            viewport=self.viewport,
            entities=[entity.to_pose() for entity in self.state.entities],
            ripples=self.state.ripples.to_list(),
            background=self.pack.profile(self.state.active_species).background
        )

    @property
    def last_snapshot(self) -> Optional[FrameSnapshot]:
        return self._last_snapshot

    def get_tick_stats(self) -> dict:
        """Tick count plus mean and latest tick duration (ms) over the recent window"""
        durations = self._tick_durations
        mean_ms = 1000.0 * sum(durations) / len(durations) if durations else 0.0
        latest_ms = 1000.0 * durations[-1] if durations else 0.0

        return {
            'tick_count': self.tick_count,
            'avg_tick_time_ms': mean_ms,
            'last_tick_time_ms': latest_ms
        }

    def print_tick_summary(self):
        """Print tick summary to console (lightweight monitoring)"""
        stats = self.get_tick_stats()
        print(f"Tick {stats['tick_count']:5d} | "
              f"Avg: {stats['avg_tick_time_ms']:6.3f} ms | "
              f"Last: {stats['last_tick_time_ms']:6.3f} ms | "
              f"Scene: {self.state.active_species.value:4s} | "
              f"Entities: {len(self.state.entities)} | "
              f"Ripples: {len(self.state.ripples)}")
