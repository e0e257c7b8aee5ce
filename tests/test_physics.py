import math

import pygame
import pytest

from ping_pong.entities import Ball, Paddle, RoundPaddle
from ping_pong.match import Cue, Side
from ping_pong.physics import deflect, hit_flat, hit_round, landing_scorer, step_flat, step_table


@pytest.fixture
def bottom_paddle():
    # 100 wide, centred on x=450
    return Paddle(400, 555, 100, 15, 8)


@pytest.fixture
def top_paddle():
    return Paddle(350, 30, 100, 15, 6)


def falling_ball(x, y, vy=5.0, speed=5.0):
    ball = Ball(x, y, 12, speed)
    ball.vel = pygame.Vector2(0, vy)
    return ball


# ----------------------------
# Deflection
# ----------------------------
def test_centre_hit_goes_straight_back(flat, bottom_paddle):
    ball = falling_ball(450, 545)
    assert hit_flat(ball, bottom_paddle, Side.PLAYER, flat)
    assert ball.vel.x == pytest.approx(0.0)
    assert ball.vel.y < 0
    assert ball.speed == pytest.approx(5.3)
    assert ball.pos.y == 555 - 12


def test_edge_hit_uses_full_deflection(flat, bottom_paddle):
    ball = falling_ball(500, 545)
    hit_flat(ball, bottom_paddle, Side.PLAYER, flat)
    angle = math.atan2(ball.vel.x, -ball.vel.y)
    assert angle == pytest.approx(math.radians(60))


def test_offset_beyond_paddle_end_is_clamped(flat):
    ball = Ball(0, 0, 12, 5)
    angle = deflect(ball, 3.0, -1, flat)
    assert angle == pytest.approx(flat.max_deflection)


def test_speed_is_capped_after_many_hits(flat):
    ball = Ball(0, 0, 12, 5.0)
    for _ in range(30):
        deflect(ball, 0.4, -1, flat)
        assert ball.speed <= 12.0
        assert ball.vel.length() <= 12.0 + 1e-9
    assert ball.speed == 12.0


def test_no_second_hit_after_reposition(flat, bottom_paddle):
    ball = falling_ball(450, 545)
    assert hit_flat(ball, bottom_paddle, Side.PLAYER, flat)
    assert not hit_flat(ball, bottom_paddle, Side.PLAYER, flat)


def test_ball_leaving_paddle_is_not_hit(flat, bottom_paddle):
    ball = falling_ball(450, 560, vy=-5.0)
    assert not hit_flat(ball, bottom_paddle, Side.PLAYER, flat)


def test_ball_beside_paddle_is_not_hit(flat, bottom_paddle):
    ball = falling_ball(300, 560)
    assert not hit_flat(ball, bottom_paddle, Side.PLAYER, flat)


def test_opponent_sends_ball_down(flat, top_paddle):
    ball = falling_ball(400, 55, vy=-5.0)
    assert hit_flat(ball, top_paddle, Side.OPPONENT, flat)
    assert ball.vel.y > 0
    assert ball.pos.y == 30 + 15 + 12


# ----------------------------
# Flat step
# ----------------------------
def test_side_wall_reflects_and_clamps(flat, bottom_paddle, top_paddle):
    ball = Ball(15, 300, 12, 5)
    ball.vel = pygame.Vector2(-5, 1)
    outcome = step_flat(ball, bottom_paddle, top_paddle, flat)
    assert ball.vel.x == 5
    assert ball.pos.x == 12
    assert outcome.cues == [Cue.WALL_HIT]
    assert outcome.scorer is None


def test_ball_past_opponent_scores_for_player(flat, bottom_paddle, top_paddle):
    ball = Ball(100, 14, 12, 5)
    ball.vel = pygame.Vector2(0, -5)
    outcome = step_flat(ball, bottom_paddle, top_paddle, flat)
    assert outcome.scorer is Side.PLAYER


def test_ball_past_player_scores_for_opponent(flat, bottom_paddle, top_paddle):
    ball = Ball(100, 585, 12, 5)
    ball.vel = pygame.Vector2(0, 5)
    outcome = step_flat(ball, bottom_paddle, top_paddle, flat)
    assert outcome.scorer is Side.OPPONENT


def test_paddle_hit_counts_once(flat, bottom_paddle, top_paddle):
    ball = falling_ball(450, 540)
    outcome = step_flat(ball, bottom_paddle, top_paddle, flat)
    assert outcome.hits == 1
    assert Cue.PADDLE_HIT in outcome.cues
    assert outcome.scorer is None


# ----------------------------
# Table step
# ----------------------------
@pytest.fixture
def bats(table):
    return (
        RoundPaddle(500, table.player_y, table.player_radius, 8, table.paddle_inset),
        RoundPaddle(500, table.opponent_y, table.opponent_radius, 4, table.paddle_inset),
    )


def test_gravity_pulls_ball_down(table, bats):
    ball = Ball(500, 400, 8, 4.5)
    ball.z = 20.0
    step_table(ball, *bats, table)
    assert ball.vz == pytest.approx(-0.3)
    assert ball.z == pytest.approx(19.7)


def test_table_bounce_loses_energy(table, bats):
    ball = Ball(500, 400, 8, 4.5)
    ball.z, ball.vz = 0.1, -1.0
    ball.vel = pygame.Vector2(1, 1)
    outcome = step_table(ball, *bats, table)
    assert ball.z == 0.0
    assert ball.vz == pytest.approx(1.3 * 0.85)
    assert ball.vel.x == pytest.approx(0.995 * 0.98)
    assert outcome.cues == [Cue.BOUNCE]
    assert outcome.scorer is None


def test_side_wall_damps_the_ball(table, bats):
    ball = Ball(102, 400, 8, 4.5)
    ball.z = 10.0
    ball.vel = pygame.Vector2(-5, 0)
    outcome = step_table(ball, *bats, table)
    assert ball.vel.x == pytest.approx(5 * 0.995 * 0.8)
    assert ball.pos.x == 108
    assert Cue.WALL_HIT in outcome.cues


def test_bat_returns_ball_with_lift(table, bats):
    player, _ = bats
    ball = Ball(500, 555, 8, 4.5)
    ball.z = 5.0
    ball.vel = pygame.Vector2(0, 3)
    outcome = step_table(ball, *bats, table)
    assert outcome.hits == 1
    assert ball.vel.y < 0
    assert ball.pos.y == 600 - 48
    assert ball.vz == pytest.approx(table.hit_lift)
    assert ball.speed == pytest.approx(4.8)


def test_ball_too_high_passes_over_bat(table, bats):
    player, _ = bats
    ball = Ball(500, 580, 8, 4.5)
    ball.z = 40.0
    ball.vel = pygame.Vector2(0, 3)
    assert not hit_round(ball, player, Side.PLAYER, table)


def test_landing_off_the_near_corner_scores_once_for_opponent(table, bats):
    ball = Ball(102, 648, 8, 4.5)
    ball.z, ball.vz = 0.1, -1.0
    ball.vel = pygame.Vector2(-3, 4)
    outcome = step_table(ball, *bats, table)
    assert outcome.scorer is Side.OPPONENT
    assert outcome.cues.count(Cue.WALL_HIT) == 0


def test_landing_off_the_far_corner_scores_for_player(table, bats):
    ball = Ball(898, 152, 8, 4.5)
    ball.z, ball.vz = 0.1, -1.0
    ball.vel = pygame.Vector2(3, -4)
    outcome = step_table(ball, *bats, table)
    assert outcome.scorer is Side.PLAYER


def test_sideline_landing_is_charged_by_half(table):
    ball = Ball(95, 500, 8, 4.5)
    assert landing_scorer(ball, table.field) is Side.OPPONENT
    ball.pos.y = 300
    assert landing_scorer(ball, table.field) is Side.PLAYER


def test_ball_flying_past_the_end_scores(table, bats):
    ball = Ball(150, 699, 8, 4.5)
    ball.z = 60.0
    ball.vel = pygame.Vector2(0, 3)
    outcome = step_table(ball, *bats, table)
    assert outcome.scorer is Side.OPPONENT


def test_ball_that_rolls_to_a_stop_scores_against_that_half(table, bats):
    ball = Ball(500, 450, 8, 4.5)
    ball.z, ball.vz = 0.1, -0.5
    ball.vel = pygame.Vector2(0.05, 0.05)
    outcome = step_table(ball, *bats, table)
    assert outcome.scorer is Side.OPPONENT

    ball = Ball(500, 350, 8, 4.5)
    ball.z, ball.vz = 0.1, -0.5
    ball.vel = pygame.Vector2(0.05, -0.05)
    assert step_table(ball, *bats, table).scorer is Side.PLAYER


def test_moving_ball_on_the_table_stays_live(table, bats):
    ball = Ball(500, 450, 8, 4.5)
    ball.z, ball.vz = 0.1, -0.5
    ball.vel = pygame.Vector2(0, 2)
    assert step_table(ball, *bats, table).scorer is None


def test_ball_behind_the_paddle_is_not_returned(flat, bottom_paddle):
    # the paddle slid sideways onto a ball already past its face
    ball = falling_ball(450, 575)
    assert not hit_flat(ball, bottom_paddle, Side.PLAYER, flat)
    assert ball.vel.y > 0


def test_ball_behind_the_opponent_is_not_returned(flat, top_paddle):
    ball = falling_ball(400, 25, vy=-5.0)
    assert not hit_flat(ball, top_paddle, Side.OPPONENT, flat)
