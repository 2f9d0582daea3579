from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MemoryRating = Literal["excellent", "good", "needs_improvement", "insufficient_data"]

RATING_LABELS: dict[MemoryRating, str] = {
    "excellent": "Excellent Memory!",
    "good": "Good Memory!",
    "needs_improvement": "Needs Improvement",
    "insufficient_data": "Not enough data",
}


@dataclass(frozen=True)
class MemoryReport:
    """Efficiency/speed classification of a finished (or running) level.

    efficiency: matched pairs per move, in percent.
    speed: timer units per move.
    Both are None when no move has been made.
    """

    rating: MemoryRating
    efficiency: float | None
    speed: float | None

    @property
    def label(self) -> str:
        return RATING_LABELS[self.rating]

    def summary(self) -> str:
        if self.efficiency is None or self.speed is None:
            return f"Memory Power: {self.label}"
        return (
            f"Memory Power: {self.label}\n"
            f"Efficiency: {self.efficiency:.2f}%\n"
            f"Speed: {self.speed:.2f} sec/move"
        )


def rate_memory(matched_pairs: int, moves: int, timer: int) -> MemoryReport:
    if moves <= 0:
        return MemoryReport(rating="insufficient_data", efficiency=None, speed=None)

    efficiency = matched_pairs / moves * 100
    speed = timer / moves
    rating: MemoryRating
    if efficiency > 75 and speed < 1.5:
        rating = "excellent"
    elif efficiency > 50 and speed < 2:
        rating = "good"
    else:
        rating = "needs_improvement"
    return MemoryReport(rating=rating, efficiency=efficiency, speed=speed)
