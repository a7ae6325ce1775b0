#!/usr/bin/env python3
"""
Test execution of resolved programs on the interpreter.
"""

import sys
import os
import logging
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from tapebf import (
    BufferOutput,
    BytesInput,
    EofPolicy,
    Interpreter,
    JumpTable,
    MismatchedBracketsError,
    StepLimitExceeded,
    TAPE_SIZE,
    resolve,
    run,
)

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def execute(program, input_data=b"", **options):
    out = BufferOutput()
    state = Interpreter(**options).run(program, resolve(program), BytesInput(input_data), out)
    return state, out.getvalue()


def test_output_byte():
    state, output = execute("+" * 72 + ".")
    assert output == bytes([72])


def test_copy_loop():
    state, output = execute("+++[>+<-]")
    assert state.tape[0] == 0
    assert state.tape[1] == 3
    assert output == b""


def test_hello_world():
    state, output = execute(HELLO_WORLD)
    assert output == b"Hello World!\n"


def test_data_pointer_wraps():
    state, _ = execute("<")
    assert state.dp == TAPE_SIZE - 1
    state, _ = execute("<>")
    assert state.dp == 0


def test_cell_wraps():
    state, _ = execute("-")
    assert state.tape[0] == 255
    state, _ = execute("-+")
    assert state.tape[0] == 0


def test_zero_cell_skips_loop_and_resumes_past_close():
    state, output = execute("[.]+")
    assert output == b""
    assert state.tape[0] == 1
    # '[' then '+': the closing bracket is never evaluated
    assert state.steps == 2


def test_input_and_echo():
    _, output = execute(",.,.", b"hi")
    assert output == b"hi"


def test_eof_policies():
    state, _ = execute("+++,", eof=EofPolicy.ZERO)
    assert state.tape[0] == 0
    state, _ = execute("+++,", eof=EofPolicy.KEEP)
    assert state.tape[0] == 3
    state, _ = execute("+++,", eof=EofPolicy.MAX)
    assert state.tape[0] == 255
    state, _ = execute("+++,", eof="keep")
    assert state.tape[0] == 3


def test_unknown_symbols_are_noops():
    state, output = execute("a+b+ c.")
    assert state.tape[0] == 2
    assert output == b"\x02"


def test_custom_tape_size():
    state, _ = execute(">>>", tape_size=3)
    assert state.dp == 0


def test_missing_jump_entry_is_an_error():
    out = BufferOutput()
    with pytest.raises(MismatchedBracketsError) as exc:
        Interpreter().run("[", JumpTable(), BytesInput(), out)
    assert exc.value.position == 0

    with pytest.raises(MismatchedBracketsError) as exc:
        Interpreter().run("+]", JumpTable(), BytesInput(), out)
    assert exc.value.position == 1
    assert exc.value.symbol == "]"


def test_step_limit():
    with pytest.raises(StepLimitExceeded) as exc:
        execute("+[]", max_steps=10)
    assert exc.value.steps == 10


def test_trace():
    state, _ = execute("+>", trace=True)
    assert len(state.trace) == 2
    assert "cmd='+'" in state.trace[0]
    assert "dp=0" in state.trace[1]

    state, _ = execute("+>")
    assert state.trace == []


def test_trace_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="tapebf.interpreter")
    execute("+>", trace=True)
    messages = [
        r.getMessage() for r in caplog.records
        if r.name == "tapebf.interpreter" and r.levelno == logging.DEBUG
    ]
    assert any("cmd='+'" in m for m in messages)
    assert any("cmd='>'" in m for m in messages)


def test_module_level_run():
    out = BufferOutput()
    state = run("++.", resolve("++."), BytesInput(), out, tape_size=8)
    assert out.getvalue() == b"\x02"
    assert state.tape.size == 8


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
