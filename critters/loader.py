"""
YAML scene pack loader with schema validation.

Loads simulation defaults, shared motion, ripple tuning and per-species
profiles from a YAML file and validates it against a JSON schema.
"""

import yaml
import json
import logging
from pathlib import Path
from typing import Dict, Optional
import jsonschema

from .data_types import (
    Species, SpeciesProfile, MotionConfig, RippleConfig,
    SimulationConfig, ScenePack
)
from .errors import DataLoadError, UnknownSpeciesError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_SCENE_PACK = DATA_DIR / "scenes.yaml"
DEFAULT_SCHEMA_DIR = DATA_DIR / "schemas"


def load_yaml(file_path: Path) -> dict:
    """
    Read a scene pack document.

    Raises:
        DataLoadError: file missing, unparsable, or not a mapping at top level
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DataLoadError(f"Scene pack not found: {file_path}")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DataLoadError(f"Cannot parse {file_path}: {e}")

    if not isinstance(data, dict):
        raise DataLoadError(f"{file_path}: top level must be a mapping, got {type(data).__name__}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Check a parsed pack against scenes.schema.json; packs without a schema are accepted as-is"""
    if not schema_path.is_file():
        logger.debug("No schema at %s, %s loaded unvalidated", schema_path, data_path)
        return

    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")

    error = jsonschema.exceptions.best_match(jsonschema.Draft7Validator(schema).iter_errors(data))
    if error is not None:
        where = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise DataLoadError(f"Validation error in {data_path} at {where}: {error.message}")


def _parse_range(data: dict, key: str, source: str) -> Dict[str, float]:
    """Parse a {min, max} range and check its ordering"""
    bounds = data.get(key)
    if not isinstance(bounds, dict) or 'min' not in bounds or 'max' not in bounds:
        raise DataLoadError(f"{source}: {key} needs both min and max")
    low = float(bounds['min'])
    high = float(bounds['max'])
    if low > high:
        raise DataLoadError(f"{source}: {key} min ({low}) exceeds max ({high})")
    return {'min': low, 'max': high}


def load_species_profile(key: str, data: dict, source: str = "<scene pack>") -> SpeciesProfile:
    """Parse one entry of the `species` mapping"""
    try:
        species = Species.parse(key)
    except UnknownSpeciesError as e:
        raise DataLoadError(f"{source}: {e}")

    return SpeciesProfile(
        species=species,
        name=data.get('name', species.value.title()),
        size_range=_parse_range(data, 'size_range', source),
        speed_range=_parse_range(data, 'speed_range', source),
        parameters={k: float(v) for k, v in data.get('parameters', {}).items()},
        background=data.get('background'),
        description=data.get('description')
    )


def parse_scene_pack(data: dict, source: str = "<scene pack>") -> ScenePack:
    """Build a ScenePack from an already-validated dict"""
    simulation = SimulationConfig(**data.get('simulation', {}))
    motion = MotionConfig(**data.get('motion', {}))
    ripples = RippleConfig(**data.get('ripples', {}))

    if not simulation.palette:
        raise DataLoadError(f"{source}: palette must not be empty")
    if simulation.entity_count < 0:
        raise DataLoadError(f"{source}: entity_count must be >= 0")

    if not data.get('species'):
        raise DataLoadError(f"{source}: no species profiles defined")

    species = {}
    for key, profile_data in data['species'].items():
        profile = load_species_profile(key, profile_data, source)
        species[profile.species] = profile

    try:
        initial = Species.parse(simulation.initial_species)
    except UnknownSpeciesError as e:
        raise DataLoadError(f"{source}: initial_species: {e}")
    if initial not in species:
        raise DataLoadError(f"{source}: initial_species {initial.value!r} has no profile")

    return ScenePack(
        simulation=simulation,
        motion=motion,
        ripples=ripples,
        species=species,
        description=data.get('description')
    )


def load_scene_pack(file_path: Optional[Path] = None, schema_dir: Optional[Path] = DEFAULT_SCHEMA_DIR) -> ScenePack:
    """
    Load a scene pack from YAML.

    Args:
        file_path: YAML file (defaults to the bundled scenes.yaml)
        schema_dir: Directory holding scenes.schema.json (None disables validation)

    Returns:
        Parsed ScenePack
    """
    file_path = Path(file_path) if file_path is not None else DEFAULT_SCENE_PACK
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = Path(schema_dir) / "scenes.schema.json"
        validate_against_schema(data, schema_path, file_path)

    try:
        pack = parse_scene_pack(data, str(file_path))
    except TypeError as e:
        # Unexpected keys reaching a dataclass constructor
        raise DataLoadError(f"Invalid field in {file_path}: {e}")

    logger.info("Loaded scene pack %s (%d species)", file_path.name, len(pack.species))
    return pack
