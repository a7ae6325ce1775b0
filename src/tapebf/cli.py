from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .api import RunOptions, run_string
from .errors import MismatchedBracketsError, StepLimitExceeded, render_bracket_error
from .interpreter import EofPolicy
from .lexer import sanitize_with_map
from .streams import LineInput, StreamOutput
from .tape import TAPE_SIZE

logger = logging.getLogger("tapebf.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tapebf",
        description="Run a program in the 8-symbol tape language.",
    )
    parser.add_argument("file", nargs="?", help="program file (default: read the program from stdin)")
    parser.add_argument("--tape-size", type=int, default=TAPE_SIZE, help=f"number of cells (default {TAPE_SIZE})")
    parser.add_argument(
        "--eof",
        choices=[p.value for p in EofPolicy],
        default=EofPolicy.ZERO.value,
        help="what ',' stores once input is exhausted (default zero)",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="abort after this many steps")
    parser.add_argument("--jit", action="store_true", help="use the numba-compiled stepping loop")
    parser.add_argument("--trace", action="store_true", help="log every executed step (implies -v)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or args.trace) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.tape_size < 1:
        print(f"Error: --tape-size must be at least 1, got {args.tape_size}", file=sys.stderr)
        return 1

    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                source = f.read()
        except FileNotFoundError:
            print(f"Couldn't find file {args.file}", file=sys.stderr)
            return 1
        except UnicodeDecodeError as e:
            print(f"Couldn't decode {args.file} as utf-8: {e}", file=sys.stderr)
            return 1
        except OSError as e:
            print(f"Couldn't read {args.file}: {e.strerror}", file=sys.stderr)
            return 1
    else:
        source = sys.stdin.read()

    options = RunOptions(
        tape_size=args.tape_size,
        eof=EofPolicy(args.eof),
        max_steps=args.max_steps,
        backend="jit" if args.jit else "python",
        trace=args.trace,
    )
    result = run_string(
        source,
        options=options,
        input_source=LineInput(sys.stdin),
        output_sink=StreamOutput(sys.stdout),
    )

    if isinstance(result.error, MismatchedBracketsError):
        _, source_map = sanitize_with_map(source)
        print(render_bracket_error(result.error, result.program, source_map=source_map))
        return 1
    if isinstance(result.error, StepLimitExceeded):
        print(f"\n{result.error}", file=sys.stderr)
        return 2

    print("")
    logger.debug("Executed %d steps", result.steps)
    return 0
