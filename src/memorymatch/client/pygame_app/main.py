from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.session import GameConfig
from memorymatch.paths import get_paths
from memorymatch.services.content import ContentService
from memorymatch.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="memorymatch")
    parser.add_argument("--width", type=int, default=480)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("--seed", type=int, default=None, help="fixed shuffle seed (random if omitted)")
    parser.add_argument("--max-level", type=int, default=GameConfig().max_level)
    parser.add_argument("--no-telemetry", action="store_true")
    args = parser.parse_args()
    if args.max_level < 1:
        parser.error("--max-level must be at least 1")

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Memory Game")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(repo_root=paths.repo_root, assets_dir=paths.assets_dir)
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        game_config=GameConfig(max_level=args.max_level),
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    return app.run()
