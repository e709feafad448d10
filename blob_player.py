"""The blob the player controls: frame-based jump/gravity physics and AABB collision."""
from typing import Sequence

import pygame

from world_level import DEFAULT_GRAVITY, DEFAULT_JUMP_VELOCITY, Platform

# ----------------------------- Config ---------------------------------
MOVE_SPEED = 4.0            # px/frame
GROUND_ACCEL = 0.8          # px/frame^2
AIR_ACCEL = 0.5             # px/frame^2
FRICTION = 0.80             # horizontal damping when no input on ground
MAX_FALL_SPEED = 16.0       # px/frame


class BlobPlayer:
    def __init__(self, x: float = 0.0, y: float = 0.0, radius: float = 26):
        self.pos = pygame.Vector2(x, y)
        self.vel = pygame.Vector2(0, 0)
        self.radius = radius
        self.gravity = DEFAULT_GRAVITY
        self.jump_velocity = DEFAULT_JUMP_VELOCITY
        self.on_ground = False
        self.move_dir = 0       # -1 left, 0 idle, 1 right; set by the front end

    @property
    def x(self) -> float:
        return self.pos.x

    @property
    def y(self) -> float:
        return self.pos.y

    def spawn(self, start, gravity: float, jump_velocity: float):
        """Place the blob at a level's start point and adopt its physics."""
        self.pos.update(start.x, start.y)
        self.vel.update(0, 0)
        self.radius = start.radius
        self.gravity = gravity
        self.jump_velocity = jump_velocity
        self.on_ground = False

    def jump(self):
        if self.on_ground:
            self.vel.y = self.jump_velocity
            self.on_ground = False

    def _overlaps(self, x: float, y: float, p: Platform) -> bool:
        r = self.radius
        return x - r < p.right and x + r > p.left and y - r < p.bottom and y + r > p.top

    # ------------------------- Physics ---------------------------------
    def update(self, platforms: Sequence[Platform]):
        target = self.move_dir * MOVE_SPEED
        accel = GROUND_ACCEL if self.on_ground else AIR_ACCEL
        # accelerate toward target speed
        if target != 0:
            if self.vel.x < target:
                self.vel.x = min(target, self.vel.x + accel)
            elif self.vel.x > target:
                self.vel.x = max(target, self.vel.x - accel)
        elif self.on_ground:
            self.vel.x *= FRICTION
            if abs(self.vel.x) < 0.05:
                self.vel.x = 0.0

        self.vel.y = min(self.vel.y + self.gravity, MAX_FALL_SPEED)
        self.on_ground = False

        # Horizontal move
        new_x = self.pos.x + self.vel.x
        for p in platforms:
            if self._overlaps(new_x, self.pos.y, p):
                if self.vel.x > 0:
                    new_x = p.left - self.radius
                elif self.vel.x < 0:
                    new_x = p.right + self.radius
                self.vel.x = 0
                break
        self.pos.x = new_x

        # Vertical move
        new_y = self.pos.y + self.vel.y
        for p in platforms:
            if self._overlaps(self.pos.x, new_y, p):
                if self.vel.y > 0:
                    new_y = p.top - self.radius
                    self.on_ground = True
                elif self.vel.y < 0:
                    new_y = p.bottom + self.radius
                self.vel.y = 0
                break
        self.pos.y = new_y

    def draw(self, surface: pygame.Surface, color):
        pygame.draw.circle(surface, pygame.Color(color), (int(self.pos.x), int(self.pos.y)), int(self.radius))
