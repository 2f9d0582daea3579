from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from memorymatch.engine.scoring import MemoryReport
from memorymatch.engine.session import GameSession, StepResult
from memorymatch.services.telemetry import TelemetryService

Cue = Literal["flip", "match", "miss", "level_up", "game_complete", "music_start", "music_stop"]


@dataclass(frozen=True)
class DirectorConfig:
    """Presentation timing, in seconds.

    reveal_delay: time the second card stays visible before evaluation.
    advance_delay: pause between clearing a level and dealing the next one.
    tick_interval: wall time per timer unit.
    report_every: levels that are a multiple of this pause on a report
      screen instead of advancing automatically (0 disables).
    """

    reveal_delay: float = 1.0
    advance_delay: float = 1.0
    tick_interval: float = 1.0
    report_every: int = 5


class GameDirector:
    """Sequences delayed engine commands on behalf of a presentation layer.

    The engine never schedules time. The director holds the session by
    reference and turns frame deltas into tick(), evaluate_selection() and
    new_level() calls, collecting sound/music cues along the way.
    """

    def __init__(
        self,
        session: GameSession,
        config: DirectorConfig | None = None,
        telemetry: TelemetryService | None = None,
    ) -> None:
        self.session = session
        self.config = config or DirectorConfig()
        if self.config.tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        self.telemetry = telemetry

        self.running = False
        self.awaiting_report = False
        self.last_report: MemoryReport | None = None

        self._clock = 0.0
        self._evaluate_in: float | None = None
        self._advance_in: float | None = None
        self._cues: list[Cue] = []

    @property
    def resolving(self) -> bool:
        return self._evaluate_in is not None

    @property
    def advancing(self) -> bool:
        return self._advance_in is not None

    def drain_cues(self) -> list[Cue]:
        out = self._cues
        self._cues = []
        return out

    def start(self) -> list[Cue]:
        if not self.running:
            self.running = True
            self._clock = 0.0
            if not self.session.game_over and not self.awaiting_report:
                self._cues.append("music_start")
        return self.drain_cues()

    def stop(self) -> list[Cue]:
        # Pending evaluation/advance survive a stop and resume on start().
        if self.running:
            self.running = False
            self._cues.append("music_stop")
        return self.drain_cues()

    def flip(self, position: int) -> StepResult:
        if not self.running:
            return StepResult(ok=False, events=[], error="Game is not running.")
        if self.advancing or self.awaiting_report:
            return StepResult(ok=False, events=[], error="Level complete.")
        res = self.session.request_flip(position)
        if res.ok:
            self._cues.append("flip")
            if len(self.session.selection) == 2:
                self._evaluate_in = self.config.reveal_delay
        return res

    def update(self, dt: float) -> list[Cue]:
        if not self.running:
            return self.drain_cues()

        self._run_clock(dt)

        if self._evaluate_in is not None:
            self._evaluate_in -= dt
            if self._evaluate_in <= 0:
                self._evaluate_in = None
                self._resolve()
        elif self._advance_in is not None:
            self._advance_in -= dt
            if self._advance_in <= 0:
                self._advance_in = None
                self._advance()

        return self.drain_cues()

    def continue_to_next_level(self) -> list[Cue]:
        if not self.awaiting_report:
            return self.drain_cues()
        self.awaiting_report = False
        self._advance()
        self._cues.append("music_start")
        return self.drain_cues()

    def restart(self) -> list[Cue]:
        self._log("game_restarted")
        self.session.restart()
        self._clock = 0.0
        self._evaluate_in = None
        self._advance_in = None
        self.awaiting_report = False
        self.last_report = None
        # cues from the abandoned game are dropped
        self._cues = []
        if self.running:
            self._cues.append("music_start")
        return self.drain_cues()

    def _run_clock(self, dt: float) -> None:
        if self.session.game_over or self.session.is_level_complete():
            self._clock = 0.0
            return
        self._clock += dt
        while self._clock >= self.config.tick_interval:
            self._clock -= self.config.tick_interval
            self.session.tick()

    def _is_milestone(self, level: int) -> bool:
        every = self.config.report_every
        return every > 0 and level % every == 0

    def _resolve(self) -> None:
        res = self.session.evaluate_selection()
        if not res.ok or res.resolution is None:
            return
        r = res.resolution
        self._cues.append("match" if r.matched else "miss")

        if r.game_complete:
            self.last_report = self.session.memory_report()
            self._cues.append("game_complete")
            self._cues.append("music_stop")
            self._log("game_completed")
        elif r.level_complete:
            self.last_report = self.session.memory_report()
            self._cues.append("level_up")
            self._log("level_cleared")
            if self._is_milestone(self.session.level):
                self.awaiting_report = True
                self._cues.append("music_stop")
            else:
                self._advance_in = self.config.advance_delay

    def _advance(self) -> None:
        if self.session.level < self.session.max_level:
            self.session.new_level(self.session.level + 1)

    def _log(self, event_type: str) -> None:
        if self.telemetry is not None:
            self.telemetry.log_progress(event_type, self.session)
