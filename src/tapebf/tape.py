from __future__ import annotations

from typing import List

import numpy as np

TAPE_SIZE = 256
CELL_MODULUS = 256


class Tape:
    """Fixed-size circular memory of 8-bit cells.

    The data pointer always stays in ``range(size)``: every move is reduced
    modulo ``size`` and every cell update modulo 256.
    """

    def __init__(self, size: int = TAPE_SIZE):
        if size < 1:
            raise ValueError(f"Tape size must be at least 1, got {size}")
        self.size = size
        self.cells = np.zeros(size, dtype=np.uint8)
        self.pointer = 0

    def move(self, delta: int) -> int:
        self.pointer = (self.pointer + delta) % self.size
        return self.pointer

    def right(self) -> int:
        return self.move(1)

    def left(self) -> int:
        return self.move(-1)

    @property
    def current(self) -> int:
        return int(self.cells[self.pointer])

    @current.setter
    def current(self, value: int) -> None:
        # Python int arithmetic, then store; avoids uint8 overflow warnings
        self.cells[self.pointer] = np.uint8(int(value) % CELL_MODULUS)

    def increment(self) -> int:
        self.current = self.current + 1
        return self.current

    def decrement(self) -> int:
        self.current = self.current - 1
        return self.current

    def snapshot(self) -> np.ndarray:
        return self.cells.copy()

    def dump(self, start: int = 0, count: int = 16) -> List[int]:
        return [int(self.cells[(start + i) % self.size]) for i in range(count)]

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> int:
        return int(self.cells[index % self.size])

    def __repr__(self) -> str:
        return f"Tape(size={self.size}, pointer={self.pointer})"
