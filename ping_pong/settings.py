"""
Tuning constants and rule presets for the two court variants.

flat  - bar paddles at the top and bottom of the field, constant speed ball
table - round bats over a ping pong table, the ball has a height under gravity

Every distance is in pixels and every speed in pixels per frame.
"""

import math
from dataclasses import dataclass, field as dc_field

import pygame

from .errors import ConfigError

VARIANTS = ("flat", "table")
MODES = ("1P", "2P")

# Opponent speed multiplier per difficulty
DIFFICULTY = {"Easy": 0.75, "Medium": 1.0, "Hard": 1.3}

# ----------------------------
# Flat court
# ----------------------------
FLAT_WIDTH, FLAT_HEIGHT = 800, 600
FLAT_PADDLE_WIDTH, FLAT_PADDLE_HEIGHT = 100, 15
FLAT_PADDLE_MARGIN = 30
FLAT_BALL_RADIUS = 12

INITIAL_BALL_SPEED = 5.0
SPEED_INCREASE = 0.3
MAX_BALL_SPEED = 12.0
PLAYER_PADDLE_SPEED = 8.0
CPU_PADDLE_SPEED = 6.0  # slightly slower for balance
WIN_SCORE = 7

MAX_DEFLECTION = math.radians(60)
FLAT_SERVE_SPREAD = math.radians(45)

# ----------------------------
# Table court
# ----------------------------
TABLE_CANVAS = (1000, 700)
TABLE_X, TABLE_Y = 100, 150
TABLE_WIDTH, TABLE_HEIGHT = 800, 500
TABLE_BALL_RADIUS = 8
TABLE_PLAYER_RADIUS, TABLE_CPU_RADIUS = 40, 35
TABLE_PLAYER_Y, TABLE_CPU_Y = 600, 200
TABLE_PADDLE_INSET = 50

GRAVITY = 0.3
TABLE_BOUNCE = 0.85
AIR_DRAG = 0.995
TABLE_FRICTION = 0.98
SIDE_DAMPING = 0.8
REACH_HEIGHT = 30
SERVE_HEIGHT, SERVE_LIFT = 20.0, 1.5
HIT_LIFT = 2.0
RUNOUT = 50
BOUNCE_CUE_MIN = 0.5
DEAD_BALL_SPEED = 0.2

TABLE_SERVE_SPEED = 4.5
TABLE_MAX_SPEED = 8.0
TABLE_PLAYER_SPEED = 8.0
TABLE_CPU_SPEED = 4.0
TABLE_SERVE_SPREAD = math.radians(15)

# Colors
WHITE = (245, 245, 245)
CLOWN_RED = (255, 0, 0)
PLAYER_RED = (255, 71, 87)
CLOWN_YELLOW = (255, 211, 42)
BAT_RED = (231, 76, 60)
BAT_PURPLE = (155, 89, 182)
TABLE_ORANGE = (255, 140, 66)
FLAT_BG = (30, 55, 153)
TABLE_BG = (22, 33, 62)


@dataclass(frozen=True)
class Field:
    left: float
    top: float
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"field dimensions must be positive, got {self.width}x{self.height}")

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    @property
    def center(self):
        return pygame.Vector2(self.left + self.width / 2, self.top + self.height / 2)

    def contains(self, pos):
        return self.left <= pos[0] <= self.right and self.top <= pos[1] <= self.bottom


@dataclass(frozen=True)
class Rules:
    """Everything a session needs to know about its court.

    Use :func:`flat_rules` or :func:`table_rules` rather than building one by
    hand; the defaults here are the flat court's.
    """

    variant: str = "flat"
    field: Field = dc_field(default_factory=lambda: Field(0, 0, FLAT_WIDTH, FLAT_HEIGHT))
    canvas: tuple = (FLAT_WIDTH, FLAT_HEIGHT)

    # ball
    ball_radius: float = FLAT_BALL_RADIUS
    serve_speed: float = INITIAL_BALL_SPEED
    speed_increase: float = SPEED_INCREASE
    max_speed: float = MAX_BALL_SPEED
    max_deflection: float = MAX_DEFLECTION
    serve_spread: float = FLAT_SERVE_SPREAD

    # paddles
    player_speed: float = PLAYER_PADDLE_SPEED
    opponent_speed: float = CPU_PADDLE_SPEED
    paddle_width: float = FLAT_PADDLE_WIDTH
    paddle_height: float = FLAT_PADDLE_HEIGHT
    paddle_margin: float = FLAT_PADDLE_MARGIN
    player_radius: float = TABLE_PLAYER_RADIUS
    opponent_radius: float = TABLE_CPU_RADIUS
    player_y: float = TABLE_PLAYER_Y
    opponent_y: float = TABLE_CPU_Y
    paddle_inset: float = TABLE_PADDLE_INSET

    # table only
    gravity: float = GRAVITY
    bounce: float = TABLE_BOUNCE
    air_drag: float = AIR_DRAG
    table_friction: float = TABLE_FRICTION
    side_damping: float = SIDE_DAMPING
    reach_height: float = REACH_HEIGHT
    serve_height: float = SERVE_HEIGHT
    serve_lift: float = SERVE_LIFT
    hit_lift: float = HIT_LIFT
    runout: float = RUNOUT
    bounce_cue_min: float = BOUNCE_CUE_MIN
    dead_ball_speed: float = DEAD_BALL_SPEED

    # opponent AI
    cpu_lead: float = 0.0
    cpu_gain: float = 1.0
    cpu_dead_zone: float = 10.0
    idle_ease: float = 0.1
    difficulty: str = "Medium"

    win_score: int = WIN_SCORE

    def __post_init__(self):
        if self.variant not in VARIANTS:
            raise ConfigError(f"unknown variant {self.variant!r}")
        if self.difficulty not in DIFFICULTY:
            raise ConfigError(f"unknown difficulty {self.difficulty!r}")
        for name in ("ball_radius", "serve_speed", "max_speed", "player_speed", "opponent_speed"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.speed_increase < 0:
            raise ConfigError("speed_increase must not be negative")
        if self.serve_speed > self.max_speed:
            raise ConfigError(f"serve_speed {self.serve_speed} is above max_speed {self.max_speed}")
        if not 0 < self.max_deflection < math.pi / 2:
            raise ConfigError("max_deflection must be between 0 and 90 degrees")
        if self.win_score < 1:
            raise ConfigError("win_score must be at least 1")
        if not 0 < self.idle_ease <= 1 or self.cpu_gain <= 0:
            raise ConfigError("idle_ease must be in (0, 1] and cpu_gain positive")

        if self.variant == "flat":
            if self.paddle_width <= 0 or self.paddle_height <= 0:
                raise ConfigError("paddle dimensions must be positive")
            if self.paddle_width > self.field.width:
                raise ConfigError("paddle is wider than the field")
            if self.paddle_margin < 0 or 2 * (self.paddle_margin + self.paddle_height) > self.field.height:
                raise ConfigError("paddles do not fit between the end lines")
        else:
            if self.player_radius <= 0 or self.opponent_radius <= 0:
                raise ConfigError("paddle radii must be positive")
            if 2 * self.paddle_inset > self.field.width:
                raise ConfigError("paddle_inset leaves no room on the table")
            if not 0 < self.bounce <= 1 or not 0 < self.air_drag <= 1:
                raise ConfigError("bounce and air_drag must be in (0, 1]")
            if self.gravity < 0:
                raise ConfigError("gravity must not be negative")
            if self.dead_ball_speed < 0:
                raise ConfigError("dead_ball_speed must not be negative")
            for name in ("player_y", "opponent_y"):
                if not self.field.top <= getattr(self, name) <= self.field.bottom:
                    raise ConfigError(f"{name} {getattr(self, name)} is off the table")

    @property
    def cpu_speed(self):
        return self.opponent_speed * DIFFICULTY[self.difficulty]


def flat_rules(**overrides):
    return Rules(**overrides)


def table_rules(**overrides):
    params = dict(
        variant="table",
        field=Field(TABLE_X, TABLE_Y, TABLE_WIDTH, TABLE_HEIGHT),
        canvas=TABLE_CANVAS,
        ball_radius=TABLE_BALL_RADIUS,
        serve_speed=TABLE_SERVE_SPEED,
        max_speed=TABLE_MAX_SPEED,
        serve_spread=TABLE_SERVE_SPREAD,
        player_speed=TABLE_PLAYER_SPEED,
        opponent_speed=TABLE_CPU_SPEED,
        cpu_lead=10.0,
        cpu_gain=0.15,
        cpu_dead_zone=5.0,
    )
    params.update(overrides)
    return Rules(**params)


def rules_for(variant, **overrides):
    if variant == "flat":
        return flat_rules(**overrides)
    if variant == "table":
        return table_rules(**overrides)
    raise ConfigError(f"unknown variant {variant!r}")
