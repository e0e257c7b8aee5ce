"""
Match bookkeeping: sides, phases, scores and the cue names handed to the
presentation layer.

    WAITING --start--> PLAYING --winning point--> GAME_OVER --reset--> WAITING
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Phase(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


class Side(Enum):
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self):
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class Cue(Enum):
    """Sound cues emitted by an update; the front end decides what they sound like."""

    PADDLE_HIT = "paddleHit"
    WALL_HIT = "wallHit"
    BOUNCE = "bounce"
    SCORE = "score"
    WIN = "win"
    SERVE = "serve"


@dataclass(frozen=True)
class ScoreEvent:
    winner: Side
    player: int
    opponent: int


class MatchState:
    def __init__(self, win_score):
        self.win_score = win_score
        self.scores = {Side.PLAYER: 0, Side.OPPONENT: 0}
        self.phase = Phase.WAITING
        self.winner = None

    @property
    def player_score(self):
        return self.scores[Side.PLAYER]

    @property
    def opponent_score(self):
        return self.scores[Side.OPPONENT]

    def start(self):
        if self.phase is not Phase.WAITING:
            logger.debug("start ignored in phase %s", self.phase.value)
            return False
        self.phase = Phase.PLAYING
        logger.info("match started, first to %d", self.win_score)
        return True

    def record(self, side):
        """Give ``side`` one point. Returns the ScoreEvent, or None outside play."""
        if self.phase is not Phase.PLAYING:
            logger.debug("point for %s ignored in phase %s", side.value, self.phase.value)
            return None
        self.scores[side] += 1
        event = ScoreEvent(side, self.player_score, self.opponent_score)
        logger.debug("point %s: %d-%d", side.value, event.player, event.opponent)
        if self.scores[side] >= self.win_score:
            self.phase = Phase.GAME_OVER
            self.winner = side
            logger.info("game over, %s wins %d-%d", side.value, event.player, event.opponent)
        return event

    def reset(self):
        if self.phase is not Phase.GAME_OVER:
            logger.debug("reset ignored in phase %s", self.phase.value)
            return False
        self.scores = {Side.PLAYER: 0, Side.OPPONENT: 0}
        self.phase = Phase.WAITING
        self.winner = None
        logger.info("match reset")
        return True
