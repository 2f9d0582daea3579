from __future__ import annotations

import json
import math
import os
import struct
import wave
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]

SAMPLE_RATE = 22050

# (frequency Hz, duration s) per note
CUE_NOTES: dict[str, list[tuple[float, float]]] = {
    "flip": [(880.0, 0.06)],
    "match": [(660.0, 0.09), (990.0, 0.12)],
    "miss": [(220.0, 0.15)],
    "level_up": [(523.3, 0.12), (659.3, 0.12), (784.0, 0.12), (1046.5, 0.25)],
    "game_complete": [(784.0, 0.15), (1046.5, 0.15), (1318.5, 0.4)],
}
MUSIC_NOTES: list[tuple[float, float]] = [
    (261.6, 0.4), (329.6, 0.4), (392.0, 0.4), (329.6, 0.4),
    (293.7, 0.4), (349.2, 0.4), (440.0, 0.4), (349.2, 0.4),
]


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


def generate_all() -> None:
    root = _repo_root()
    data_dir = root / "src" / "memorymatch" / "data"
    symbols = json.loads((data_dir / "symbols.json").read_text(encoding="utf-8"))["symbols"]
    audio = json.loads((data_dir / "audio.json").read_text(encoding="utf-8"))

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 28)

    # Card face placeholders
    size = (128, 128)
    for sym in symbols:
        color = tuple(sym.get("color", (90, 90, 90)))
        surf = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(surf, color, pygame.Rect(0, 0, *size), border_radius=14)
        pygame.draw.rect(surf, (0, 0, 0), pygame.Rect(0, 0, *size), width=3, border_radius=14)
        pygame.draw.circle(surf, (255, 255, 255), (size[0] // 2, size[1] // 2 - 10), 30)
        initial = font.render(sym["name"][:1], True, color)
        surf.blit(initial, initial.get_rect(center=(size[0] // 2, size[1] // 2 - 10)).topleft)
        title = font.render(sym["name"], True, (255, 255, 255))
        surf.blit(title, title.get_rect(center=(size[0] // 2, size[1] - 22)).topleft)

        out_path = root / sym["art_path"]
        out_path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(surf, out_path.as_posix())

    pygame.quit()

    for cue, rel in audio.get("cues", {}).items():
        _write_tones(root / rel, CUE_NOTES.get(cue, [(440.0, 0.1)]))
    music = audio.get("music")
    if isinstance(music, str):
        _write_tones(root / music, MUSIC_NOTES, volume=0.15)

    print("Generated placeholder assets under ./assets/")


def _write_tones(path: Path, notes: list[tuple[float, float]], volume: float = 0.4) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    frames = bytearray()
    for freq, duration in notes:
        count = int(SAMPLE_RATE * duration)
        for i in range(count):
            # short linear fade-out per note avoids clicks
            env = 1.0 - i / count
            sample = volume * env * math.sin(2 * math.pi * freq * i / SAMPLE_RATE)
            frames += struct.pack("<h", int(sample * 32767))
    with wave.open(path.as_posix(), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(SAMPLE_RATE)
        w.writeframes(bytes(frames))


if __name__ == "__main__":
    generate_all()
