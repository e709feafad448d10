"""
Level progression for the blob platformer.

The live game state is a GameSession value. Every transition takes the
current session and returns the next one; nothing is mutated in place.
The two collaborators are passed in explicitly:

- player: anything with ``x``, ``y``, ``radius`` and ``spawn(start, gravity,
  jump_velocity)``, ``update(platforms)``, ``jump()``
- resize: a callable ``resize(width, height)`` that fits the render surface
  to the level geometry

One ``step`` runs per frame: player physics, then the fall check, then the
goal check. Input actions go through ``handle_action`` whenever the host
delivers them, so their order relative to a frame's checks is not fixed.
"""
import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Sequence, Tuple

from level_data import ConfigError
from world_level import WorldLevel

logger = logging.getLogger(__name__)

# ----------------------------- Config ---------------------------------
DEFAULT_WIDTH, DEFAULT_HEIGHT = 900, 560
FALL_MARGIN = 100                  # px below the surface before respawning
CONTROLS_HINT = "Move: A/D or Left/Right   Jump: Space/W/Up   Next: N"

Resize = Callable[[int, int], None]


class Action(Enum):
    JUMP = "jump"
    CYCLE_LEVEL = "cycle_level"
    RESTART = "restart"


@dataclass(frozen=True)
class GameSession:
    levels: Tuple[Dict[str, Any], ...]
    level_index: int
    world: WorldLevel
    surface_size: Tuple[int, int]
    completed: bool = False

    @property
    def level_count(self) -> int:
        return len(self.levels)

    @property
    def surface_height(self) -> int:
        return self.surface_size[1]


# ----------------------------- Loading --------------------------------
def _load(levels: Tuple[Dict[str, Any], ...], index: int, player, resize: Resize) -> GameSession:
    if not 0 <= index < len(levels):
        raise IndexError(f"Level index {index} out of range (0..{len(levels) - 1})")

    world = WorldLevel.from_record(levels[index])
    size = (int(world.infer_width(DEFAULT_WIDTH)), int(world.infer_height(DEFAULT_HEIGHT)))
    resize(*size)

    session = GameSession(levels=levels, level_index=index, world=world, surface_size=size)
    respawn(session, player)
    logger.info("Loaded level %d/%d: %s (%dx%d)", index + 1, len(levels), world.name, *size)
    return session


def start(levels: Sequence[Dict[str, Any]], player, resize: Resize) -> GameSession:
    """Begin a new game at the first level."""
    levels = tuple(levels)
    if not levels:
        raise ConfigError("No levels to play")
    return _load(levels, 0, player, resize)


def load_level(session: GameSession, index: int, player, resize: Resize) -> GameSession:
    """Replace the current world with a freshly built one for ``index``."""
    return _load(session.levels, index, player, resize)


def respawn(session: GameSession, player) -> GameSession:
    world = session.world
    player.spawn(world.start, world.gravity, world.jump_velocity)
    return session


# ----------------------------- Checks ---------------------------------
def check_fall(session: GameSession, player) -> bool:
    return player.y > session.surface_height + FALL_MARGIN


def check_goal(session: GameSession, player) -> bool:
    goal = session.world.goal
    distance = math.hypot(player.x - goal.x, player.y - goal.y)
    return distance < player.radius + goal.radius


# ----------------------------- Transitions ----------------------------
def advance(session: GameSession, player, resize: Resize) -> GameSession:
    next_index = session.level_index + 1
    if next_index >= session.level_count:
        logger.info("All %d levels complete", session.level_count)
        return replace(session, completed=True)
    return _load(session.levels, next_index, player, resize)


def restart(session: GameSession, player, resize: Resize) -> GameSession:
    logger.info("Restarting from the first level")
    return _load(session.levels, 0, player, resize)


def cycle_level(session: GameSession, player, resize: Resize) -> GameSession:
    """Jump to the next level, wrapping from the last back to the first."""
    return _load(session.levels, (session.level_index + 1) % session.level_count, player, resize)


def step(session: GameSession, player, resize: Resize) -> GameSession:
    """Advance the simulation by one frame."""
    if session.completed:
        return session

    player.update(session.world.platforms)

    # fall check runs first: a blob that is both fallen and touching the goal respawns
    if check_fall(session, player):
        logger.debug("Player fell at y=%.1f, respawning", player.y)
        return respawn(session, player)

    if check_goal(session, player):
        return advance(session, player, resize)
    return session


def handle_action(session: GameSession, action: Action, player, resize: Resize) -> GameSession:
    if action is Action.RESTART:
        return restart(session, player, resize)
    if action is Action.CYCLE_LEVEL:
        return cycle_level(session, player, resize)
    if action is Action.JUMP and not session.completed:
        player.jump()
    return session


# ----------------------------- HUD ------------------------------------
def hud_lines(session: GameSession) -> List[str]:
    return [
        session.world.name,
        f"Level {session.level_index + 1} / {session.level_count}",
        CONTROLS_HINT,
    ]
