#!/usr/bin/env python3
"""
Loop resolution: bracket pairing and mismatch positions.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from tapebf import MismatchedBracketsError, resolve


def test_nested_pairs_in_closing_order():
    table = resolve("[[]]")
    assert table.pairs == [(1, 2), (0, 3)]

    table = resolve("[[[]]]")
    assert table.pairs == [(2, 3), (1, 4), (0, 5)]


def test_lookup_both_directions():
    table = resolve("+[->[-]<]")
    assert table[1] == 8
    assert table[8] == 1
    assert table.open_to_close == {1: 8, 4: 6}
    assert table.close_to_open == {8: 1, 6: 4}
    assert 0 not in table
    assert 4 in table


def test_orphan_close_reported_eagerly():
    with pytest.raises(MismatchedBracketsError) as exc:
        resolve("[]]")
    assert exc.value.position == 2
    assert exc.value.symbol == ']'

    # the later unclosed '[' is never reached
    with pytest.raises(MismatchedBracketsError) as exc:
        resolve("][")
    assert exc.value.position == 0


def test_unclosed_open_reports_innermost_pending():
    with pytest.raises(MismatchedBracketsError) as exc:
        resolve("[[]")
    assert exc.value.position == 0
    assert exc.value.symbol == '['

    with pytest.raises(MismatchedBracketsError) as exc:
        resolve("[+[")
    assert exc.value.position == 2


def test_pairs_are_total_and_disjoint():
    programs = [
        "",
        "+-<>.,",
        "[]",
        "[][][]",
        "+[>[-]<[>+<-]]>[[[]]]",
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]",
    ]
    for program in programs:
        table = resolve(program)
        assert len(table) == program.count('[')
        seen = [pos for pair in table for pos in pair]
        assert len(seen) == len(set(seen))
        for open_pos, close_pos in table:
            assert program[open_pos] == '['
            assert program[close_pos] == ']'


def test_other_symbols_are_ignored():
    table = resolve("a[b]c")
    assert table.pairs == [(1, 3)]


def test_as_array():
    arr = resolve("+[[]]").as_array(5)
    assert list(arr) == [-1, 4, 3, 2, 1]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
