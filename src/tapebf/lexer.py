from typing import List, Tuple

OPCODES = '><+-.,[]'


def is_code_char(ch: str) -> bool:
    return ch in OPCODES


def sanitize(source: str) -> str:
    return ''.join(ch for ch in source if is_code_char(ch))


def sanitize_with_map(source: str) -> Tuple[str, List[int]]:
    """Like ``sanitize`` but also returns, for every kept symbol, its index in ``source``."""
    kept: List[str] = []
    positions: List[int] = []
    for index, ch in enumerate(source):
        if is_code_char(ch):
            kept.append(ch)
            positions.append(index)
    return ''.join(kept), positions
