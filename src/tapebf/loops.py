from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from .errors import make_bracket_error

logger = logging.getLogger("tapebf.loops")


@dataclass
class JumpTable:
    """Bidirectional map between matched ``[`` / ``]`` positions."""

    open_to_close: Dict[int, int] = field(default_factory=dict)
    close_to_open: Dict[int, int] = field(default_factory=dict)
    # In the order the pairs were closed: "[[]]" -> [(1, 2), (0, 3)]
    pairs: List[Tuple[int, int]] = field(default_factory=list)

    def add(self, open_pos: int, close_pos: int) -> None:
        self.open_to_close[open_pos] = close_pos
        self.close_to_open[close_pos] = open_pos
        self.pairs.append((open_pos, close_pos))

    def target(self, pos: int) -> int:
        if pos in self.open_to_close:
            return self.open_to_close[pos]
        return self.close_to_open[pos]

    def __getitem__(self, pos: int) -> int:
        return self.target(pos)

    def __contains__(self, pos: object) -> bool:
        return pos in self.open_to_close or pos in self.close_to_open

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.pairs)

    def as_array(self, length: int) -> np.ndarray:
        # -1 marks positions without a partner
        arr = np.full(length, -1, dtype=np.int64)
        for open_pos, close_pos in self.pairs:
            arr[open_pos] = close_pos
            arr[close_pos] = open_pos
        return arr


def resolve(program: Sequence[str]) -> JumpTable:
    table = JumpTable()
    stack: List[int] = []

    for pos, cmd in enumerate(program):
        if cmd == '[':
            stack.append(pos)
        elif cmd == ']':
            if not stack:
                raise make_bracket_error(position=pos, symbol=']')
            table.add(stack.pop(), pos)

    if stack:
        raise make_bracket_error(position=stack[-1], symbol='[')

    logger.debug("Resolved %d loop(s) over %d symbols", len(table), len(program))
    return table
