"""Loading the ordered list of level records from disk (JSON or YAML)."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from world_level import WorldLevel

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """The level source is missing, unreadable, malformed or empty."""


def _parse(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def load_levels(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Return the level records in play order.

    The file holds either a bare list of records or ``{"levels": [...]}``.
    Records are returned as-is; defaults are applied later by
    ``world_level.resolve_record``.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Level file not found: {path}")
    try:
        payload = _parse(path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        raise ConfigError(f"{path.name}: could not read level data: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("levels")
    if not isinstance(payload, list):
        raise ConfigError(f"{path.name}: expected a list of levels or a 'levels' key")

    for i, record in enumerate(payload):
        if not isinstance(record, dict):
            raise ConfigError(f"{path.name}: level {i} is not a mapping")
        # build each world once so a bad record fails here, not mid-game
        try:
            WorldLevel.from_record(record).check()
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"{path.name}: level {i} is malformed: {e}") from e

    if not payload:
        raise ConfigError(f"{path.name}: no levels defined")

    logger.info("Loaded %d levels from %s", len(payload), path)
    return payload
