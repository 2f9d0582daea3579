from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NewLevelAction:
    level: int


@dataclass(frozen=True)
class FlipAction:
    position: int


@dataclass(frozen=True)
class EvaluateAction:
    pass


@dataclass(frozen=True)
class TickAction:
    pass


@dataclass(frozen=True)
class RestartAction:
    pass


Action = NewLevelAction | FlipAction | EvaluateAction | TickAction | RestartAction
