from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .errors import make_bracket_error, make_step_limit_error
from .loops import JumpTable
from .streams import InputSource, OutputSink
from .tape import TAPE_SIZE, Tape

logger = logging.getLogger("tapebf.interpreter")


class EofPolicy(enum.Enum):
    """What ``,`` stores when the input source is exhausted."""

    ZERO = "zero"
    KEEP = "keep"
    MAX = "max"


@dataclass
class ExecutionState:
    tape: Tape
    ip: int = 0
    steps: int = 0
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    @property
    def dp(self) -> int:
        return self.tape.pointer

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
            logger.debug(message)


class Interpreter:
    """Fetch-decode-execute loop over a resolved program."""

    def __init__(
        self,
        *,
        tape_size: int = TAPE_SIZE,
        eof: EofPolicy = EofPolicy.ZERO,
        max_steps: Optional[int] = None,
        trace: bool = False,
    ):
        self.tape_size = tape_size
        self.eof = EofPolicy(eof)
        self.max_steps = max_steps
        self.trace = trace

    def new_state(self) -> ExecutionState:
        return ExecutionState(tape=Tape(self.tape_size), is_tracing=self.trace)

    def run(
        self,
        program: Sequence[str],
        jump_table: JumpTable,
        input_source: InputSource,
        output_sink: OutputSink,
    ) -> ExecutionState:
        state = self.new_state()
        length = len(program)
        logger.debug("Running %d symbols on a %d-cell tape", length, self.tape_size)

        while state.ip < length:
            self.step(program, jump_table, state, input_source, output_sink)

        logger.debug("Finished after %d steps", state.steps)
        return state

    def step(
        self,
        program: Sequence[str],
        jump_table: JumpTable,
        state: ExecutionState,
        input_source: InputSource,
        output_sink: OutputSink,
    ) -> None:
        self.check_budget(state)
        tape = state.tape
        cmd = program[state.ip]

        if state.is_tracing:
            state.add_trace(
                f"step={state.steps} ip={state.ip} cmd={cmd!r} dp={tape.pointer} cell={tape.current}"
            )

        if cmd == '>':
            tape.right()
        elif cmd == '<':
            tape.left()
        elif cmd == '+':
            tape.increment()
        elif cmd == '-':
            tape.decrement()
        elif cmd == '.':
            output_sink.write_byte(tape.current)
        elif cmd == ',':
            self.read_into(tape, input_source)
        elif cmd == '[':
            if tape.current == 0:
                state.ip = self.lookup(jump_table.open_to_close, state.ip, cmd)
        elif cmd == ']':
            if tape.current != 0:
                state.ip = self.lookup(jump_table.close_to_open, state.ip, cmd)

        # A taken jump also lands here, so execution resumes past the partner
        state.ip += 1
        state.steps += 1

    def check_budget(self, state: ExecutionState) -> None:
        if self.max_steps is not None and state.steps >= self.max_steps:
            raise make_step_limit_error(steps=state.steps, position=state.ip)

    def read_into(self, tape: Tape, input_source: InputSource) -> None:
        value = input_source.read_byte()
        if value is not None:
            tape.current = value
        elif self.eof is EofPolicy.ZERO:
            tape.current = 0
        elif self.eof is EofPolicy.MAX:
            tape.current = 255

    @staticmethod
    def lookup(table: Dict[int, int], pos: int, cmd: str) -> int:
        target = table.get(pos)
        if target is None:
            raise make_bracket_error(position=pos, symbol=cmd, unresolved=True)
        return target


def run(
    program: Sequence[str],
    jump_table: JumpTable,
    input_source: InputSource,
    output_sink: OutputSink,
    **options,
) -> ExecutionState:
    return Interpreter(**options).run(program, jump_table, input_source, output_sink)
