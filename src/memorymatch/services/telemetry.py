from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from memorymatch.engine.session import GameSession


@dataclass
class TelemetryService:
    """Append-only JSONL record of boot and game-progress events."""

    path: Path
    enabled: bool = True

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if not self.enabled:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_progress(self, event_type: str, session: GameSession) -> None:
        report = session.memory_report()
        self.log(
            event_type,
            {
                "seed": session.seed,
                "level": session.level,
                "matched_pairs": session.matched_pairs,
                "moves": session.moves,
                "timer": session.timer,
                "rating": report.rating,
            },
        )

    def read_all(self) -> list[dict[str, object]]:
        if not self.path.exists():
            return []
        out: list[dict[str, object]] = []
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    out.append(json.loads(line))
        return out
