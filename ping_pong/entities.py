import math

import pygame

from .settings import WHITE


def clamp(x, a, b):
    return max(a, min(b, x))


# ----------------------------
# Ball
# ----------------------------
class Ball:
    def __init__(self, x, y, radius, speed, color=WHITE):
        self.pos = pygame.Vector2(x, y)
        self.vel = pygame.Vector2(0, 0)
        self.radius = radius
        self.speed = speed
        self.color = color
        # height above the table and its rate of change (table court only)
        self.z = 0.0
        self.vz = 0.0

    def launch(self, angle=0.0, direction=1):
        # direction: +1 down the field (toward the player), -1 up (toward the opponent)
        self.vel = pygame.Vector2(math.sin(angle), math.cos(angle) * direction) * self.speed

    def place(self, pos, z=0.0):
        self.pos = pygame.Vector2(pos)
        self.z = z

    def stop(self):
        self.vel = pygame.Vector2(0, 0)
        self.vz = 0.0

    @property
    def moving(self):
        return self.vel.length_squared() > 0

    def snapshot(self):
        return {
            "x": self.pos.x,
            "y": self.pos.y,
            "z": self.z,
            "radius": self.radius,
            "speed": self.speed,
            "color": self.color,
        }


# ----------------------------
# Paddle classes
# ----------------------------
class Paddle:
    """Bar paddle of the flat court. ``x``/``y`` is the top-left corner."""

    shape = "rect"

    def __init__(self, x, y, w, h, speed, color=WHITE):
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.speed = speed
        self.color = color

    @property
    def center_x(self):
        return self.x + self.w / 2

    @center_x.setter
    def center_x(self, value):
        self.x = value - self.w / 2

    def limits(self, field):
        """Lowest and highest allowed ``center_x``."""
        return field.left + self.w / 2, field.right - self.w / 2

    def clamp(self, field):
        lo, hi = self.limits(field)
        self.center_x = clamp(self.center_x, lo, hi)

    def move_to(self, x, field):
        self.center_x = x
        self.clamp(field)

    def shift(self, dx, field):
        self.center_x += dx
        self.clamp(field)

    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))

    def snapshot(self):
        return {
            "shape": self.shape,
            "x": self.x,
            "y": self.y,
            "width": self.w,
            "height": self.h,
            "color": self.color,
        }


class RoundPaddle(Paddle):
    """Round bat of the table court. ``x``/``y`` is the centre."""

    shape = "circle"

    def __init__(self, x, y, radius, speed, inset, color=WHITE):
        super().__init__(x, y, radius * 2, radius * 2, speed, color)
        self.radius = radius
        self.inset = inset

    @property
    def center_x(self):
        return self.x

    @center_x.setter
    def center_x(self, value):
        self.x = value

    def limits(self, field):
        return field.left + self.inset, field.right - self.inset

    def rect(self):
        r = pygame.Rect(0, 0, int(self.w), int(self.h))
        r.center = (int(self.x), int(self.y))
        return r

    def snapshot(self):
        data = super().snapshot()
        data["radius"] = self.radius
        return data
