from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .errors import MismatchedBracketsError, StepLimitExceeded, TapeBFError
from .interpreter import EofPolicy, ExecutionState, Interpreter
from .lexer import sanitize
from .loops import resolve
from .streams import BufferOutput, BytesInput, InputSource, OutputSink, TeeOutput
from .tape import TAPE_SIZE

logger = logging.getLogger("tapebf.api")

BACKENDS = ("python", "jit")


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = TAPE_SIZE
    eof: EofPolicy = EofPolicy.ZERO
    max_steps: Optional[int] = None
    backend: str = "python"
    trace: bool = False


@dataclass(frozen=True)
class RunResult:
    ok: bool
    output: bytes
    error: Optional[TapeBFError] = None
    steps: int = 0
    tape: Optional[np.ndarray] = field(default=None, compare=False)
    program: str = ""

    @property
    def error_position(self) -> Optional[int]:
        if isinstance(self.error, (MismatchedBracketsError, StepLimitExceeded)):
            return self.error.position
        return None

    @property
    def text(self) -> str:
        return ''.join(chr(b) for b in self.output)


def make_interpreter(options: RunOptions) -> Interpreter:
    if options.backend not in BACKENDS:
        raise ValueError(f"Unknown backend {options.backend!r}, expected one of {BACKENDS}")
    kwargs = dict(
        tape_size=options.tape_size,
        eof=options.eof,
        max_steps=options.max_steps,
        trace=options.trace,
    )
    if options.backend == "jit" and not options.trace:
        from .jit import JitInterpreter

        return JitInterpreter(**kwargs)
    if options.backend == "jit":
        logger.warning("Tracing is not supported by the jit backend, using the python backend")
    return Interpreter(**kwargs)


def run_string(
    source: str,
    *,
    input_data: Union[bytes, str] = b"",
    options: Optional[RunOptions] = None,
    input_source: Optional[InputSource] = None,
    output_sink: Optional[OutputSink] = None,
) -> RunResult:
    opts = options or RunOptions()
    program = sanitize(source)
    source_in = input_source if input_source is not None else BytesInput(input_data)
    sink = TeeOutput(output_sink) if output_sink is not None else BufferOutput()

    try:
        jump_table = resolve(program)
    except MismatchedBracketsError as e:
        logger.debug("Loop resolution failed: %s", e)
        return RunResult(ok=False, output=b"", error=e, program=program)

    interpreter = make_interpreter(opts)
    state: Optional[ExecutionState] = None
    try:
        state = interpreter.run(program, jump_table, source_in, sink)
    except TapeBFError as e:
        logger.debug("Run stopped: %s", e)
        return RunResult(ok=False, output=sink.getvalue(), error=e, program=program)

    return RunResult(
        ok=True,
        output=sink.getvalue(),
        steps=state.steps,
        tape=state.tape.snapshot(),
        program=program,
    )


def run_file(path: str | Path, *, encoding: str = "utf-8", **kwargs) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), **kwargs)

