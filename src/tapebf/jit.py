from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from numba import njit

from .errors import make_bracket_error
from .interpreter import ExecutionState, Interpreter
from .loops import JumpTable
from .streams import InputSource, OutputSink

logger = logging.getLogger("tapebf.jit")

BATCH_STEPS = 100000

STOP_END = 0
STOP_OUTPUT = 1
STOP_INPUT = 2
STOP_BUDGET = 3
STOP_UNRESOLVED = 4


@njit(cache=True)
def jit_loop(program_arr, memory, pc, pointer, bracket_map_arr, max_steps):
    """
    Run until the program ends, an I/O symbol is reached, ``max_steps``
    symbols have executed, or a bracket without a partner needs to jump.

    I/O symbols are left for the caller: ``pc`` still points at them.
    """
    stop_reason = STOP_END
    mem_len = len(memory)
    prog_len = len(program_arr)
    steps = 0

    while pc < prog_len:
        if steps >= max_steps:
            stop_reason = STOP_BUDGET
            break
        command = program_arr[pc]

        if command == 62:  # '>'
            pointer = (pointer + 1) % mem_len
        elif command == 60:  # '<'
            pointer = (pointer - 1) % mem_len
        elif command == 43:  # '+'
            memory[pointer] = (memory[pointer] + 1) & 255
        elif command == 45:  # '-'
            memory[pointer] = (memory[pointer] - 1) & 255
        elif command == 46:  # '.'
            stop_reason = STOP_OUTPUT
            break
        elif command == 44:  # ','
            stop_reason = STOP_INPUT
            break
        elif command == 91:  # '['
            if memory[pointer] == 0:
                target = bracket_map_arr[pc]
                if target < 0:
                    stop_reason = STOP_UNRESOLVED
                    break
                pc = target
        elif command == 93:  # ']'
            if memory[pointer] != 0:
                target = bracket_map_arr[pc]
                if target < 0:
                    stop_reason = STOP_UNRESOLVED
                    break
                pc = target

        pc += 1
        steps += 1

    return pc, pointer, stop_reason, steps


def encode_program(program: Sequence[str]) -> np.ndarray:
    # Anything outside ASCII becomes 0, a no-op like any other unknown symbol
    return np.array([ord(c) if ord(c) < 128 else 0 for c in program], dtype=np.int32)


class JitInterpreter(Interpreter):
    """Same semantics as ``Interpreter``; the stepping loop is numba-compiled.

    Tracing is not available here since the compiled loop never surfaces
    individual steps.
    """

    def __init__(self, **options):
        if options.get("trace"):
            raise ValueError("Tracing is not supported by the jit backend")
        super().__init__(**options)

    def run(
        self,
        program: Sequence[str],
        jump_table: JumpTable,
        input_source: InputSource,
        output_sink: OutputSink,
    ) -> ExecutionState:
        state = self.new_state()
        tape = state.tape
        program_arr = encode_program(program)
        bracket_map_arr = jump_table.as_array(len(program))
        logger.debug("JIT run of %d symbols on a %d-cell tape", len(program), self.tape_size)

        while state.ip < len(program):
            self.check_budget(state)
            budget = BATCH_STEPS
            if self.max_steps is not None:
                budget = min(budget, self.max_steps - state.steps)

            pc, pointer, stop_reason, steps = jit_loop(
                program_arr, tape.cells, state.ip, tape.pointer, bracket_map_arr, budget
            )
            state.ip = int(pc)
            tape.pointer = int(pointer)
            state.steps += int(steps)

            if stop_reason == STOP_OUTPUT:
                self.check_budget(state)
                output_sink.write_byte(tape.current)
                state.ip += 1
                state.steps += 1
            elif stop_reason == STOP_INPUT:
                self.check_budget(state)
                self.read_into(tape, input_source)
                state.ip += 1
                state.steps += 1
            elif stop_reason == STOP_UNRESOLVED:
                raise make_bracket_error(
                    position=state.ip, symbol=program[state.ip], unresolved=True
                )

        logger.debug("JIT run finished after %d steps", state.steps)
        return state
