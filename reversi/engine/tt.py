from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

EXACT, LOWER, UPPER = 0, 1, 2

# The Zobrist hash covers discs only, so the side to move is part of the key.
TTKey = Tuple[int, int]


@dataclass
class TTEntry:
    depth: int
    score: int
    flag: int
    best: int  # square 0..63, or -1 for none/pass
    gen: int


class TranspositionTable:
    def __init__(self, capacity: int = 1_000_000) -> None:
        self.store: Dict[TTKey, TTEntry] = {}
        self.gen: int = 0
        self.capacity = capacity
        self.stats = {"lookups": 0, "hits": 0, "stores": 0, "replacements": 0}

    def new_generation(self) -> None:
        self.gen = (self.gen + 1) & 0xFF

    def probe(self, key: TTKey) -> Optional[TTEntry]:
        self.stats["lookups"] += 1
        e = self.store.get(key)
        if e is not None:
            self.stats["hits"] += 1
        return e

    def save(self, key: TTKey, depth: int, score: int, flag: int, best: int) -> None:
        self.stats["stores"] += 1
        e = self.store.get(key)
        entry = TTEntry(depth=depth, score=score, flag=flag, best=best, gen=self.gen)
        if e is None:
            if len(self.store) >= self.capacity:
                return
            self.store[key] = entry
            return
        replace = depth >= e.depth or (self.gen - e.gen) % 256 >= 2
        if replace:
            self.stats["replacements"] += 1
            self.store[key] = entry

    def clear(self) -> None:
        self.store.clear()

    def __len__(self) -> int:
        return len(self.store)
