import logging

from .api import RunOptions, RunResult, run_file, run_string
from .errors import MismatchedBracketsError, StepLimitExceeded, TapeBFError, render_bracket_error
from .interpreter import EofPolicy, ExecutionState, Interpreter, run
from .lexer import sanitize, sanitize_with_map
from .loops import JumpTable, resolve
from .streams import BufferOutput, BytesInput, LineInput, StreamOutput
from .tape import TAPE_SIZE, Tape

logging.getLogger("tapebf").addHandler(logging.NullHandler())

__all__ = [
    'TAPE_SIZE',
    'Tape',
    'JumpTable',
    'resolve',
    'EofPolicy',
    'ExecutionState',
    'Interpreter',
    'run',
    'sanitize',
    'sanitize_with_map',
    'BytesInput',
    'LineInput',
    'BufferOutput',
    'StreamOutput',
    'TapeBFError',
    'MismatchedBracketsError',
    'StepLimitExceeded',
    'render_bracket_error',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
]
