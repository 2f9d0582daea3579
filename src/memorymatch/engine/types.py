from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

Color = tuple[int, int, int]


@dataclass(frozen=True)
class Symbol:
    """A pair-defining card face. Exactly two cards per level share one."""

    id: str
    name: str
    glyph: str
    art_path: str
    color: Color


@dataclass(frozen=True)
class SymbolSet:
    """Immutable, ordered symbol catalogue used by the engine."""

    symbols: tuple[Symbol, ...]

    def __len__(self) -> int:
        return len(self.symbols)

    def get(self, symbol_id: str) -> Symbol:
        for s in self.symbols:
            if s.id == symbol_id:
                return s
        raise KeyError(symbol_id)

    def all_ids(self) -> Sequence[str]:
        return [s.id for s in self.symbols]
