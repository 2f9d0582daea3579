from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from memorymatch.engine.types import Color, Symbol, SymbolSet


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _parse_color(raw: object) -> Color:
    if not isinstance(raw, list) or len(raw) != 3 or not all(isinstance(c, int) for c in raw):
        raise ContentError("color must be a list of three ints")
    return (raw[0], raw[1], raw[2])


@dataclass(frozen=True)
class AudioCatalog:
    cues: dict[str, str]
    music: str | None = None


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_symbols(self) -> SymbolSet:
        path = self._data_dir / "symbols.json"
        schema = _load_schema(self._schema_dir / "symbols.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))

        if not isinstance(raw, dict):
            raise ContentError("symbols.json must be an object")
        raw_symbols = raw.get("symbols")
        if not isinstance(raw_symbols, list):
            raise ContentError("symbols.json.symbols must be a list")

        symbols: list[Symbol] = []
        seen: set[str] = set()
        for item in raw_symbols:
            if not isinstance(item, dict):
                continue
            sid = _require_str(item, "id")
            if sid in seen:
                raise ContentError(f"Duplicate symbol id: {sid}")
            seen.add(sid)
            symbols.append(
                Symbol(
                    id=sid,
                    name=_require_str(item, "name"),
                    glyph=_require_str(item, "glyph"),
                    art_path=_require_str(item, "art_path"),
                    color=_parse_color(item.get("color")),
                )
            )
        # Content order is significant: lower levels use the first symbols.
        return SymbolSet(symbols=tuple(symbols))

    def load_audio(self) -> AudioCatalog:
        path = self._data_dir / "audio.json"
        schema = _load_schema(self._schema_dir / "audio.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("audio.json must be an object")
        raw_cues = raw.get("cues")
        if not isinstance(raw_cues, dict):
            raise ContentError("audio.json.cues must be an object")
        cues = {k: v for k, v in raw_cues.items() if isinstance(k, str) and isinstance(v, str)}
        music = raw.get("music")
        return AudioCatalog(cues=cues, music=music if isinstance(music, str) else None)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_symbols()
        _ = self.load_audio()
