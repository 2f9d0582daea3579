"""Deterministic, headless rules engine for MemoryMatch.

IMPORTANT: This package must never import pygame.
"""

from .actions import EvaluateAction, FlipAction, NewLevelAction, RestartAction, TickAction
from .scoring import MemoryReport, rate_memory
from .session import Card, GameConfig, GameSession, Resolution, StepResult, new_game, replay, step
from .types import Symbol, SymbolSet

__all__ = [
    "Card",
    "EvaluateAction",
    "FlipAction",
    "GameConfig",
    "GameSession",
    "MemoryReport",
    "NewLevelAction",
    "Resolution",
    "RestartAction",
    "StepResult",
    "Symbol",
    "SymbolSet",
    "TickAction",
    "new_game",
    "rate_memory",
    "replay",
    "step",
]
