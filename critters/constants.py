"""
Central configuration constants for the critters simulation.

Defines default values and tuning parameters used across modules.
Every value here is a fallback: the YAML scene pack overrides it.
"""

# ============================================================================
# Scene Configuration
# ============================================================================

# Entities spawned per scene selection
ENTITY_COUNT_DEFAULT = 2

# Color palette entities draw their color tag from
PALETTE_DEFAULT = ['#FF6B6B', '#4ECDC4', '#45B7D1']

# Scene loaded at startup
INITIAL_SPECIES_DEFAULT = 'fish'

# World seed used when the scene pack does not pin one
SEED_DEFAULT = 0

# Fixed frame step for drivers that do not supply a clock reading (60 fps)
FRAME_MS_DEFAULT = 1000.0 / 60.0


# ============================================================================
# Spawning Ranges
# ============================================================================

# Body size range (pixels) for fish and birds; bugs are half size
SIZE_RANGE_DEFAULT = {'min': 30.0, 'max': 60.0}
BUG_SIZE_RANGE_DEFAULT = {'min': 15.0, 'max': 30.0}

# Speed cap range (pixels per tick)
SPEED_RANGE_DEFAULT = {'min': 2.0, 'max': 4.0}

# Initial velocity per axis as a fraction of the speed cap (+/-)
INITIAL_SPEED_FRACTION = 0.5


# ============================================================================
# Shared Motion (applies to every species)
# ============================================================================

# Per-axis uniform turbulence added each tick (+/-)
TURBULENCE_DEFAULT = 0.2

# Global sinusoidal drift: amplitude and time scales (ms) for x and y
DRIFT_AMPLITUDE_DEFAULT = 0.2
DRIFT_X_TIMESCALE_MS = 2000.0
DRIFT_Y_TIMESCALE_MS = 1800.0


# ============================================================================
# Species Behavior Defaults
# ============================================================================

# Fish: vertical undulation, heading smoothing, animation rates
FISH_UNDULATION_AMPLITUDE = 0.15
FISH_UNDULATION_TIMESCALE_MS = 1500.0
FISH_HEADING_SMOOTHING = 0.1
FISH_TAIL_RATE = 0.1
FISH_FIN_RATE = 0.15

# Bug: erratic impulse chance and magnitude, animation rates
BUG_IMPULSE_CHANCE = 0.05
BUG_IMPULSE_MAGNITUDE = 1.0
BUG_WIGGLE_RATE = 0.2
BUG_WING_RATE = 0.3

# Bird: course correction chance, target range (x speed cap), easing, rates
BIRD_RETARGET_CHANCE = 0.02
BIRD_TARGET_SPEED_FACTOR = 1.0  # target per axis in [-factor*cap, +factor*cap]
BIRD_EASING = 0.1
BIRD_WING_RATE = 0.2
BIRD_BODY_RATE = 0.1

# Species-keyed parameter defaults (looked up when a profile omits a key)
SPECIES_PARAMETER_DEFAULTS = {
    'fish': {
        'undulation_amplitude': FISH_UNDULATION_AMPLITUDE,
        'undulation_timescale_ms': FISH_UNDULATION_TIMESCALE_MS,
        'heading_smoothing': FISH_HEADING_SMOOTHING,
        'tail_rate': FISH_TAIL_RATE,
        'fin_rate': FISH_FIN_RATE,
    },
    'bug': {
        'impulse_chance': BUG_IMPULSE_CHANCE,
        'impulse_magnitude': BUG_IMPULSE_MAGNITUDE,
        'wiggle_rate': BUG_WIGGLE_RATE,
        'wing_rate': BUG_WING_RATE,
    },
    'bird': {
        'retarget_chance': BIRD_RETARGET_CHANCE,
        'target_speed_factor': BIRD_TARGET_SPEED_FACTOR,
        'easing': BIRD_EASING,
        'wing_rate': BIRD_WING_RATE,
        'body_rate': BIRD_BODY_RATE,
    },
}


# ============================================================================
# Ripple Configuration
# ============================================================================

RIPPLE_SPAWN_CHANCE = 0.02      # Per moving entity per tick
RIPPLE_INITIAL_ALPHA = 0.5
RIPPLE_GROWTH_PER_TICK = 1.0    # Radius increase (pixels)
RIPPLE_FADE_PER_TICK = 0.005    # Alpha decrease

# Upper bound on live ripples (None = unbounded)
MAX_RIPPLES_DEFAULT = None


# ============================================================================
# Performance Configuration
# ============================================================================

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 100
