# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Tests for Go source emission."""

from __future__ import annotations

import pytest

from deferfuzz.core.emitter import (
    NO_INLINE,
    RUNTIME_SUPPORT,
    UNREACHED,
    EmissionError,
    emit_program,
    emit_scope,
)
from deferfuzz.core.generator_base import catch_all
from deferfuzz.core.simulator import simulate_program
from deferfuzz.core.tree import Entry, Interception, Scope, Signal, Step


def test_emit_leaves():
    scope = Scope(
        body=[
            Entry(Step(1)),
            Entry(Step(2), deferred=True),
            Entry(Interception(0)),
            Entry(Signal(4)),
        ]
    )
    assert emit_scope(scope) == [
        "\ttype _ int",
        "\tstep(1)",
        "\tdefer step(2)",
        "\texpect(0, recover())",
        "\tpanic(4)",
    ]


def test_emit_nested_scope_indents_and_blocks_inlining():
    scope = Scope(body=[Entry(Scope(body=[Entry(Step(1))]), deferred=True)])
    assert emit_scope(scope, depth=0) == [
        "type _ int",
        "defer func() {",
        "\ttype _ int",
        "\tstep(1)",
        "}()",
    ]


def test_unreached_actions_emit_sentinel():
    lines = emit_scope(Scope(body=[Entry(Step()), Entry(Signal())]))
    assert lines[1] == f"\tstep({UNREACHED})"
    assert lines[2] == f"\tpanic({UNREACHED})"


def test_deferred_interception_rejected():
    entry = Entry(Interception(1))
    entry.deferred = True
    with pytest.raises(EmissionError):
        emit_scope(Scope(body=[entry]))


def test_unknown_action_rejected():
    with pytest.raises(EmissionError):
        emit_scope(Scope(body=[Entry(object())]))


def test_emit_program_layout():
    root = Scope(body=[catch_all(), Entry(Step()), Entry(Signal())])
    simulate_program(root)
    text = emit_program(root)
    assert text.startswith('package main\n\nimport "log"\n\nfunc main() {\n')
    main_body = text.split("func main() {\n", 1)[1].split("\n}\n", 1)[0]
    assert main_body.splitlines() == [
        "\ttype _ int",
        "\tdefer func() {",
        "\t\ttype _ int",
        "\t\texpect(1, recover())",
        "\t}()",
        "\tstep(1)",
        "\tpanic(1)",
    ]
    assert text.endswith(RUNTIME_SUPPORT)
    assert "func step(want int)" in text
    assert "func expect(n int, err interface{})" in text


def test_every_scope_has_no_inline_marker():
    inner = Scope(body=[Entry(Step(2))])
    root = Scope(body=[Entry(Step(1)), Entry(Scope(body=[Entry(inner)]))])
    text = emit_program(root)
    assert text.count(NO_INLINE) == 3
    assert text.count("func() {") == 2
    assert text.count("}()") == 2
