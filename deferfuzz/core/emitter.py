# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Render a stamped scope tree as a self-checking Go program."""

from __future__ import annotations

from deferfuzz.core.tree import Interception, Scope, Signal, Step

INDENT = "\t"

# Never equal to a live counter or a recovered fault id.
UNREACHED = -1

# Prevents the compiler from inlining a function literal; each Scope must keep its own frame.
NO_INLINE = "type _ int"

PROGRAM_HEADER = 'package main\n\nimport "log"\n\nfunc main() {\n'

RUNTIME_SUPPORT = """
func expect(n int, err interface{}) {
\tprintln("expect", n)
\tif n != err && !(n == 0 && err == nil) {
\t\tlog.Fatalf("have %v, want %v", err, n)
\t}
}

var steps int

func step(want int) {
\tprintln("step", want)
\tsteps++
\tif steps != want {
\t\tlog.Fatalf("have %v, want %v", steps, want)
\t}
}
"""


class EmissionError(ValueError):
    """The tree cannot be rendered, or the rendered source does not parse."""


def _n(action: Step | Signal | Interception) -> int:
    return UNREACHED if action.n is None else action.n


def emit_scope(scope: Scope, depth: int = 1) -> list[str]:
    """Lines for the body of scope, indented to depth."""
    pad = INDENT * depth
    lines = [pad + NO_INLINE]
    for entry in scope.body:
        prefix = pad + ("defer " if entry.deferred else "")
        action = entry.action
        if isinstance(action, Step):
            lines.append(f"{prefix}step({_n(action)})")
        elif isinstance(action, Signal):
            lines.append(f"{prefix}panic({_n(action)})")
        elif isinstance(action, Interception):
            if entry.deferred:
                raise EmissionError("defer of expect(recover()) doesn't make sense")
            lines.append(f"{prefix}expect({_n(action)}, recover())")
        elif isinstance(action, Scope):
            lines.append(prefix + "func() {")
            lines.extend(emit_scope(action, depth + 1))
            lines.append(pad + "}()")
        else:
            raise EmissionError(f"Cannot emit {action!r}")
    return lines


def emit_program(root: Scope) -> str:
    """Complete Go source: main() holds root, followed by the step/expect runtime."""
    body = "\n".join(emit_scope(root))
    return f"{PROGRAM_HEADER}{body}\n}}\n{RUNTIME_SUPPORT}"
