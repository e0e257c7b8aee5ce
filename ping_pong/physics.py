"""
One frame of ball physics for each court variant.

The step functions mutate the ball (and nothing else) and report what
happened in an :class:`Outcome`; they never touch the score or play sounds.
"""

import math
from dataclasses import dataclass, field

import pygame

from .entities import clamp
from .match import Cue, Side


@dataclass
class Outcome:
    cues: list = field(default_factory=list)
    hits: int = 0
    scorer: Side = None


def facing(side):
    """Vertical direction a paddle on ``side`` sends the ball."""
    return -1 if side is Side.PLAYER else 1


def approaching(ball, side):
    return ball.vel.y * facing(side) < 0


def deflect(ball, offset, direction, rules):
    """Send the ball off a paddle face.

    ``offset`` is where the ball met the paddle, -1 at one end, 0 at the
    centre, 1 at the other end. The ball speeds up by ``speed_increase`` but
    never beyond ``max_speed``. Returns the outgoing angle in radians.
    """
    angle = clamp(offset, -1.0, 1.0) * rules.max_deflection
    ball.speed = min(ball.speed + rules.speed_increase, rules.max_speed)
    ball.vel = pygame.Vector2(math.sin(angle), math.cos(angle) * direction) * ball.speed
    return angle


# ----------------------------
# Collisions
# ----------------------------
def in_front(ball, paddle, side):
    """Whether the ball centre is still on the playing side of the paddle's middle."""
    middle = paddle.y + paddle.h / 2
    if side is Side.PLAYER:
        return ball.pos.y <= middle
    return ball.pos.y >= middle


def hit_flat(ball, paddle, side, rules):
    if not approaching(ball, side) or not in_front(ball, paddle, side):
        return False
    # nearest point of the paddle rectangle to the ball centre
    nx = clamp(ball.pos.x, paddle.x, paddle.x + paddle.w)
    ny = clamp(ball.pos.y, paddle.y, paddle.y + paddle.h)
    if ball.pos.distance_squared_to((nx, ny)) > ball.radius ** 2:
        return False
    direction = facing(side)
    deflect(ball, (ball.pos.x - paddle.center_x) / (paddle.w / 2), direction, rules)
    # nudge out past the face the ball leaves from
    if direction < 0:
        ball.pos.y = paddle.y - ball.radius
    else:
        ball.pos.y = paddle.y + paddle.h + ball.radius
    return True


def hit_round(ball, paddle, side, rules):
    if not approaching(ball, side) or ball.z >= rules.reach_height:
        return False
    if ball.pos.distance_to((paddle.x, paddle.y)) >= ball.radius + paddle.radius:
        return False
    direction = facing(side)
    offset = clamp((ball.pos.x - paddle.x) / paddle.radius, -1.0, 1.0)
    deflect(ball, offset, direction, rules)
    ball.vz = rules.hit_lift + abs(offset)
    ball.pos.y = paddle.y + direction * (paddle.radius + ball.radius)
    return True


def _paddle_hits(ball, player, opponent, rules, outcome, hit):
    for paddle, side in ((player, Side.PLAYER), (opponent, Side.OPPONENT)):
        if hit(ball, paddle, side, rules):
            outcome.cues.append(Cue.PADDLE_HIT)
            outcome.hits += 1
            return


# ----------------------------
# Steps
# ----------------------------
def step_flat(ball, player, opponent, rules):
    f = rules.field
    r = ball.radius
    outcome = Outcome()

    ball.pos += ball.vel

    # left/right walls
    if (ball.pos.x - r <= f.left and ball.vel.x < 0) or (ball.pos.x + r >= f.right and ball.vel.x > 0):
        ball.vel.x = -ball.vel.x
        outcome.cues.append(Cue.WALL_HIT)
    ball.pos.x = clamp(ball.pos.x, f.left + r, f.right - r)

    _paddle_hits(ball, player, opponent, rules, outcome, hit_flat)

    # past the opponent (top) or the player (bottom)
    if ball.pos.y - r <= f.top:
        outcome.scorer = Side.PLAYER
    elif ball.pos.y + r >= f.bottom:
        outcome.scorer = Side.OPPONENT
    return outcome


def landing_scorer(ball, field):
    """Who wins the point when the ball lands off the table.

    The miss is charged to the half the ball came down beside: a ball that
    lands off the player's half is the player's miss. A ball that dies on
    the table is charged the same way.
    """
    if ball.pos.y >= field.center.y:
        return Side.OPPONENT
    return Side.PLAYER


def step_table(ball, player, opponent, rules):
    f = rules.field
    r = ball.radius
    outcome = Outcome()

    ball.vz -= rules.gravity
    ball.pos += ball.vel
    ball.z += ball.vz
    ball.vel *= rules.air_drag

    # table surface
    if ball.z <= 0 and ball.vz < 0:
        ball.z = 0.0
        ball.vz *= -rules.bounce
        ball.vel *= rules.table_friction
        if abs(ball.vz) > rules.bounce_cue_min:
            outcome.cues.append(Cue.BOUNCE)
        # off the table, or rolled to a stop on it
        if not f.contains(ball.pos) or ball.vel.length() < rules.dead_ball_speed:
            outcome.scorer = landing_scorer(ball, f)
            return outcome

    # side walls
    if ball.pos.x < f.left + r or ball.pos.x > f.right - r:
        ball.vel.x *= -rules.side_damping
        ball.pos.x = clamp(ball.pos.x, f.left + r, f.right - r)
        outcome.cues.append(Cue.WALL_HIT)

    _paddle_hits(ball, player, opponent, rules, outcome, hit_round)

    # flew past an end without landing
    if ball.pos.y < f.top - rules.runout:
        outcome.scorer = Side.PLAYER
    elif ball.pos.y > f.bottom + rules.runout:
        outcome.scorer = Side.OPPONENT
    return outcome


STEPS = {"flat": step_flat, "table": step_table}
