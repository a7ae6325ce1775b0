from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass
class TapeBFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class MismatchedBracketsError(TapeBFError):
    position: int
    symbol: Optional[str] = None


@dataclass
class StepLimitExceeded(TapeBFError):
    steps: int
    position: int


def make_bracket_error(
    *, position: int, symbol: str, unresolved: bool = False
) -> MismatchedBracketsError:
    if unresolved:
        what = f"'{symbol}' has no entry in the jump table"
    elif symbol == ']':
        what = 'closing bracket does not have a matching opening bracket'
    else:
        what = 'opening bracket is never closed'
    return MismatchedBracketsError(
        message=f"MismatchedBrackets: {what} (index {position})",
        position=position,
        symbol=symbol,
    )


def make_step_limit_error(*, steps: int, position: int) -> StepLimitExceeded:
    return StepLimitExceeded(
        message=f"StepLimitExceeded: stopped after {steps} steps (index {position})",
        steps=steps,
        position=position,
    )


def _build_window(program: str, index: int, *, context: int) -> List[str]:
    start = max(0, index - context)
    end = min(len(program), index + context + 1)
    window = program[start:end]
    left = '...' if start > 0 else ''
    right = '...' if end < len(program) else ''
    caret = ' ' * (len(left) + index - start) + '^'
    return [f"{left}{window}{right}", caret]


def render_bracket_error(
    error: MismatchedBracketsError,
    program: str,
    *,
    context: int = 10,
    source_map: Optional[Sequence[int]] = None,
) -> str:
    """Human-readable report for a bracket error.

    Shows up to ``context`` symbols on each side of the failing position with a
    caret underneath. ``source_map`` translates the sanitized index back to the
    index in the unfiltered source (see ``lexer.sanitize_with_map``).
    """
    index = error.position
    out: List[str] = ["Sorry! Your program could not be run."]
    if 0 <= index < len(program):
        out.extend(_build_window(program, index, context=context))

    if error.symbol == ']':
        sentence = f"The closing bracket at index {index} does not have a matching opening bracket"
    elif error.symbol == '[':
        sentence = f"The opening bracket at index {index} does not have a matching closing bracket"
    else:
        sentence = f"The bracket at index {index} does not have a matching bracket"
    if source_map is not None and 0 <= index < len(source_map):
        sentence += f" (source index {source_map[index]})"
    out.append(sentence)
    return "\n".join(out)
