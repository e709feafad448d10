"""
Level model for the blob platformer.

A level record (one entry of levels.json) is resolved once into a fully
populated LevelRecord, then turned into a WorldLevel:
- theme colours (background / platform / blob)
- physics knobs the player reads (gravity, jump velocity)
- spawn point and goal circle
- an immutable tuple of Platform rectangles, either listed literally or
  generated from a few parameters (ground, stairs, obstacle patterns)
"""
import logging
import math
from dataclasses import astuple, dataclass, field
from typing import Any, Dict, List, Tuple, Union

import pygame

logger = logging.getLogger(__name__)

# ----------------------------- Config ---------------------------------
DEFAULT_NAME = "Level"
DEFAULT_BACKGROUND = "#F0F0F0"
DEFAULT_PLATFORM = "#C8C8C8"
DEFAULT_ACTOR = "#1478FF"

DEFAULT_GRAVITY = 0.65
DEFAULT_JUMP_VELOCITY = -11.0      # negative is up

DEFAULT_START = (80, 180, 26)      # x, y, radius
DEFAULT_GOAL = (0, 0, 20)

GROUND_H = 36
STAIR_H = 12
FLOATING_SIZE = (50, 12)
DIAGONAL_SIZE = (60, 12)
DIAGONAL_RISE = 40

GOAL_OUTER_COLOR = (255, 150, 0)
GOAL_INNER_COLOR = (255, 200, 100)


def _pick(raw: Dict[str, Any], *keys, default=None):
    # first key present with a non-None value wins
    for k in keys:
        v = raw.get(k)
        if v is not None:
            return v
    return default


# ----------------------------- Platform -------------------------------
@dataclass(frozen=True)
class Platform:
    """Static axis-aligned rectangle, anchored at its top-left corner."""
    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Platform":
        return cls(
            x=_pick(raw, "x", default=0),
            y=_pick(raw, "y", default=0),
            w=_pick(raw, "w", "width", default=0),
            h=_pick(raw, "h", "height", default=0),
        )

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))

    def draw(self, surface: pygame.Surface, color):
        pygame.draw.rect(surface, color, self.rect)


# ----------------------------- Records --------------------------------
@dataclass(frozen=True)
class Theme:
    background: str = DEFAULT_BACKGROUND
    platform: str = DEFAULT_PLATFORM
    actor: str = DEFAULT_ACTOR


@dataclass(frozen=True)
class SpawnPoint:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class Obstacle:
    type: str
    count: int = 0
    start_x: float = 0
    spacing: float = 0
    offset_y: float = 0


@dataclass(frozen=True)
class GenerationParams:
    ground_y: float = 0
    ground_width: float = 0
    stair_count: int = 0
    stair_start: float = 0
    stair_width: float = 0
    stair_height: float = 0
    gap_width: float = 0
    obstacles: Tuple[Obstacle, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GenerationParams":
        obstacles = tuple(
            Obstacle(
                type=o.get("type", ""),
                count=o.get("count", 0),
                start_x=o.get("startX", 0),
                spacing=o.get("spacing", 0),
                offset_y=o.get("offsetY", 0),
            )
            for o in raw.get("obstacles") or []
        )
        return cls(
            ground_y=raw.get("groundY", 0),
            ground_width=raw.get("groundWidth", 0),
            stair_count=raw.get("stairCount", 0),
            stair_start=raw.get("stairStart", 0),
            stair_width=raw.get("stairWidth", 0),
            stair_height=raw.get("stairHeight", 0),
            gap_width=raw.get("gapWidth", 0),
            obstacles=obstacles,
        )


@dataclass(frozen=True)
class LiteralPlatforms:
    platforms: Tuple[Platform, ...] = ()


@dataclass(frozen=True)
class GeneratedPlatforms:
    params: GenerationParams


PlatformSource = Union[LiteralPlatforms, GeneratedPlatforms]


@dataclass(frozen=True)
class LevelRecord:
    """A level record with every optional field already defaulted."""
    name: str = DEFAULT_NAME
    theme: Theme = field(default_factory=Theme)
    gravity: float = DEFAULT_GRAVITY
    jump_velocity: float = DEFAULT_JUMP_VELOCITY
    start: SpawnPoint = SpawnPoint(*DEFAULT_START)
    goal: SpawnPoint = SpawnPoint(*DEFAULT_GOAL)
    source: PlatformSource = LiteralPlatforms()


def _resolve_point(raw, defaults: Tuple[float, float, float]) -> SpawnPoint:
    raw = raw or {}
    dx, dy, dr = defaults
    return SpawnPoint(
        x=_pick(raw, "x", default=dx),
        y=_pick(raw, "y", default=dy),
        radius=_pick(raw, "radius", "r", default=dr),
    )


def resolve_record(raw: Dict[str, Any]) -> LevelRecord:
    """Fill in every missing field of a raw level record with its default.

    Sub-objects (theme, start, goal) are merged field by field, so a record
    that only sets ``theme.bg`` still gets the default platform and blob
    colours.
    """
    theme_raw = raw.get("theme") or {}
    theme = Theme(
        background=_pick(theme_raw, "background", "bg", default=DEFAULT_BACKGROUND),
        platform=_pick(theme_raw, "platform", default=DEFAULT_PLATFORM),
        actor=_pick(theme_raw, "actor", "blob", default=DEFAULT_ACTOR),
    )

    goal_raw = raw.get("goal")
    if goal_raw is None:
        # older level files keep the goal as flat top-level keys
        goal_raw = {"x": raw.get("goalX"), "y": raw.get("goalY"), "r": raw.get("goalRadius")}

    gen_raw = raw.get("generationParams")
    if raw.get("levelType") == "generated" and gen_raw is not None:
        source = GeneratedPlatforms(GenerationParams.from_dict(gen_raw))
    else:
        literal = tuple(Platform.from_dict(p) for p in raw.get("platforms") or [])
        source = LiteralPlatforms(literal)

    return LevelRecord(
        name=str(raw.get("name") or DEFAULT_NAME),
        theme=theme,
        gravity=_pick(raw, "gravity", default=DEFAULT_GRAVITY),
        jump_velocity=_pick(raw, "jumpVelocity", "jumpV", default=DEFAULT_JUMP_VELOCITY),
        start=_resolve_point(raw.get("start"), DEFAULT_START),
        goal=_resolve_point(goal_raw, DEFAULT_GOAL),
        source=source,
    )


# ----------------------------- Level Generator ------------------------
def generate_platforms(params: GenerationParams) -> List[Platform]:
    """Build ground, stairs and obstacle patterns. Deterministic, no RNG."""
    platforms = [Platform(0, params.ground_y, params.ground_width, GROUND_H)]

    # ascending steps, moving right and up
    for i in range(params.stair_count):
        platforms.append(Platform(
            params.stair_start + i * (params.stair_width + params.gap_width),
            params.ground_y - (i + 1) * params.stair_height,
            params.stair_width,
            STAIR_H,
        ))

    for obstacle in params.obstacles:
        if obstacle.type == "floating":
            w, h = FLOATING_SIZE
            for i in range(obstacle.count):
                platforms.append(Platform(obstacle.start_x + i * obstacle.spacing, obstacle.offset_y, w, h))
        elif obstacle.type == "diagonal":
            w, h = DIAGONAL_SIZE
            for i in range(obstacle.count):
                platforms.append(Platform(
                    obstacle.start_x + i * obstacle.spacing,
                    obstacle.offset_y - i * DIAGONAL_RISE,
                    w, h,
                ))
        else:
            logger.debug("Ignoring obstacle with unknown type %r", obstacle.type)

    return platforms


# ----------------------------- World Level ----------------------------
@dataclass(frozen=True)
class WorldLevel:
    name: str
    theme: Theme
    gravity: float
    jump_velocity: float
    start: SpawnPoint
    goal: SpawnPoint
    platforms: Tuple[Platform, ...]

    @classmethod
    def from_record(cls, raw: Dict[str, Any]) -> "WorldLevel":
        return cls.from_resolved(resolve_record(raw))

    @classmethod
    def from_resolved(cls, record: LevelRecord) -> "WorldLevel":
        if isinstance(record.source, GeneratedPlatforms):
            platforms = tuple(generate_platforms(record.source.params))
        else:
            platforms = record.source.platforms
        return cls(
            name=record.name,
            theme=record.theme,
            gravity=record.gravity,
            jump_velocity=record.jump_velocity,
            start=record.start,
            goal=record.goal,
            platforms=platforms,
        )

    # size the window to fit the geometry
    def infer_width(self, default_w: float = 640) -> float:
        if not self.platforms:
            return default_w
        return max(p.right for p in self.platforms)

    def infer_height(self, default_h: float = 360) -> float:
        if not self.platforms:
            return default_h
        return max(p.bottom for p in self.platforms)

    def check(self):
        """Raise TypeError or ValueError if a field the game reads is unusable."""
        numbers = [self.gravity, self.jump_velocity, *astuple(self.start), *astuple(self.goal)]
        for p in self.platforms:
            numbers.extend(astuple(p))
        for n in numbers:
            if isinstance(n, bool) or not isinstance(n, (int, float)):
                raise TypeError(f"expected a number, got {n!r}")
        for c in astuple(self.theme):
            pygame.Color(c)

    # --------------------------- Render --------------------------------
    def draw(self, surface: pygame.Surface, frame: int = 0):
        """Background, platforms and goal. The player draws itself afterwards."""
        surface.fill(pygame.Color(self.theme.background))
        color = pygame.Color(self.theme.platform)
        for p in self.platforms:
            p.draw(surface, color)
        self.draw_goal(surface, frame)

    def draw_goal(self, surface: pygame.Surface, frame: int = 0):
        pulse = 1 + 0.3 * math.sin(frame * 0.05)
        size = self.goal.radius * pulse
        center = (int(self.goal.x), int(self.goal.y))
        pygame.draw.circle(surface, GOAL_OUTER_COLOR, center, max(1, int(size)), 3)
        pygame.draw.circle(surface, GOAL_INNER_COLOR, center, max(1, int(size / 2)), 1)
