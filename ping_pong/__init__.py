"""Ping pong physics, opponent AI and match rules for a flat court and a table court."""

from .errors import ConfigError, PingPongError
from .match import Cue, MatchState, Phase, ScoreEvent, Side
from .session import Frame, MoveTo, Nudge, Pause, Reset, Session, Start
from .settings import Field, Rules, flat_rules, rules_for, table_rules

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Cue",
    "Field",
    "Frame",
    "MatchState",
    "MoveTo",
    "Nudge",
    "Pause",
    "PingPongError",
    "Phase",
    "Reset",
    "Rules",
    "ScoreEvent",
    "Session",
    "Side",
    "Start",
    "flat_rules",
    "rules_for",
    "table_rules",
]
