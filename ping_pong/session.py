"""
A game session: every entity of one match plus the frame update.

The front end feeds normalized input events into :meth:`Session.update`
once per frame and gets back a :class:`Frame` with the cues to play and the
point scored, if any. Everything the renderer needs is in
:meth:`Session.snapshot`.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .cpu import CPU
from .entities import Ball, Paddle, RoundPaddle, clamp
from .errors import ConfigError
from .match import Cue, MatchState, Phase, ScoreEvent, Side
from .physics import STEPS
from .settings import (
    BAT_PURPLE,
    BAT_RED,
    CLOWN_RED,
    CLOWN_YELLOW,
    MODES,
    PLAYER_RED,
    WHITE,
    flat_rules,
)

logger = logging.getLogger(__name__)


# ----------------------------
# Input events
# ----------------------------
@dataclass(frozen=True)
class MoveTo:
    """Put a paddle's centre at ``x`` (pointer control)."""

    x: float
    side: Side = Side.PLAYER


@dataclass(frozen=True)
class Nudge:
    """Move a paddle one step of its own speed; direction is -1 or 1 (keyboard control)."""

    direction: int
    side: Side = Side.PLAYER


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass
class Frame:
    cues: List[Cue] = field(default_factory=list)
    score: Optional[ScoreEvent] = None
    phase: Phase = Phase.WAITING


class Session:
    def __init__(self, rules=None, mode="1P", rng=None):
        if mode not in MODES:
            raise ConfigError(f"unknown mode {mode!r}")
        self.rules = rules or flat_rules()
        self.mode = mode
        self.rng = rng or random.Random()
        self.field = self.rules.field

        self.player, self.opponent = self._make_paddles()
        self.ball = self._make_ball()
        self.cpu = CPU(self.opponent, self.rules)
        self.match = MatchState(self.rules.win_score)
        self.step = STEPS[self.rules.variant]

        self.paused = False
        self.serve_side = None
        self.rally = 0
        self.longest_rally = 0

    # ----------------------------
    # Setup
    # ----------------------------
    def _make_paddles(self):
        r = self.rules
        f = self.field
        # a second human moves as fast as the first
        opponent_speed = r.player_speed if self.mode == "2P" else r.cpu_speed
        if r.variant == "flat":
            x = f.center.x - r.paddle_width / 2
            player = Paddle(x, f.bottom - r.paddle_margin - r.paddle_height,
                            r.paddle_width, r.paddle_height, r.player_speed, PLAYER_RED)
            opponent = Paddle(x, f.top + r.paddle_margin,
                              r.paddle_width, r.paddle_height, opponent_speed, CLOWN_YELLOW)
        else:
            player = RoundPaddle(f.center.x, r.player_y, r.player_radius,
                                 r.player_speed, r.paddle_inset, BAT_RED)
            opponent = RoundPaddle(f.center.x, r.opponent_y, r.opponent_radius,
                                   opponent_speed, r.paddle_inset, BAT_PURPLE)
        return player, opponent

    def _make_ball(self):
        color = CLOWN_RED if self.rules.variant == "flat" else WHITE
        c = self.field.center
        return Ball(c.x, c.y, self.rules.ball_radius, self.rules.serve_speed, color)

    def paddle(self, side):
        return self.player if side is Side.PLAYER else self.opponent

    @property
    def phase(self):
        return self.match.phase

    @property
    def in_play(self):
        return self.match.phase is Phase.PLAYING and not self.paused

    # ----------------------------
    # Ball handling
    # ----------------------------
    def serve(self, toward=None):
        """Re-centre the ball and launch it at serve speed toward ``toward``."""
        if toward is None:
            toward = self.rng.choice(list(Side))
        self.serve_side = toward
        ball = self.ball
        ball.place(self.field.center, z=self.rules.serve_height if self.rules.variant == "table" else 0.0)
        ball.speed = self.rules.serve_speed
        angle = self.rng.uniform(-self.rules.serve_spread, self.rules.serve_spread)
        ball.launch(angle, 1 if toward is Side.PLAYER else -1)
        if self.rules.variant == "table":
            ball.vz = self.rules.serve_lift
        logger.debug("serve toward %s at %.1f", toward.value, ball.speed)
        return Cue.SERVE

    def rest_ball(self):
        self.ball.place(self.field.center)
        self.ball.stop()
        self.ball.speed = self.rules.serve_speed

    # ----------------------------
    # Input
    # ----------------------------
    def handle(self, event):
        """Apply one input event and return the cues it caused."""
        cues = []
        if isinstance(event, MoveTo):
            if self._controls(event.side):
                self.paddle(event.side).move_to(event.x, self.field)
        elif isinstance(event, Nudge):
            if self._controls(event.side):
                paddle = self.paddle(event.side)
                paddle.shift(clamp(event.direction, -1, 1) * paddle.speed, self.field)
        elif isinstance(event, Start):
            if self.match.start():
                cues.append(self.serve())
        elif isinstance(event, Reset):
            if self.match.reset():
                self.new_match()
        elif isinstance(event, Pause):
            if self.match.phase is Phase.PLAYING:
                self.paused = not self.paused
                logger.info("paused" if self.paused else "resumed")
        else:
            raise TypeError(f"not an input event: {event!r}")
        return cues

    def _controls(self, side):
        # in 1P the opponent paddle belongs to the CPU
        return side is Side.PLAYER or self.mode == "2P"

    def new_match(self):
        self.rest_ball()
        self.player.move_to(self.field.center.x, self.field)
        self.opponent.move_to(self.field.center.x, self.field)
        self.paused = False
        self.serve_side = None
        self.rally = 0

    # ----------------------------
    # Frame update
    # ----------------------------
    def update(self, events=()):
        frame = Frame()
        for event in events:
            frame.cues.extend(self.handle(event))

        if self.mode == "1P" and not self.paused:
            self.cpu.update(self.ball, in_play=self.in_play and self.ball.moving)

        if not self.in_play:
            frame.phase = self.match.phase
            return frame

        outcome = self.step(self.ball, self.player, self.opponent, self.rules)
        frame.cues.extend(outcome.cues)
        self.rally += outcome.hits

        if outcome.scorer is not None:
            frame.score = self.match.record(outcome.scorer)
            frame.cues.append(Cue.SCORE)
            self.longest_rally = max(self.longest_rally, self.rally)
            self.rally = 0
            if self.match.phase is Phase.GAME_OVER:
                frame.cues.append(Cue.WIN)
                self.rest_ball()
            else:
                # the side that lost the point receives the next serve
                frame.cues.append(self.serve(outcome.scorer.other))

        frame.phase = self.match.phase
        return frame

    def snapshot(self):
        f = self.field
        return {
            "variant": self.rules.variant,
            "mode": self.mode,
            "phase": self.match.phase.value,
            "paused": self.paused,
            "scores": {"player": self.match.player_score, "opponent": self.match.opponent_score},
            "win_score": self.match.win_score,
            "winner": self.match.winner.value if self.match.winner else None,
            "rally": self.rally,
            "longest_rally": self.longest_rally,
            "field": {"left": f.left, "top": f.top, "width": f.width, "height": f.height},
            "ball": self.ball.snapshot(),
            "player": self.player.snapshot(),
            "opponent": self.opponent.snapshot(),
        }
