# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Scope tree: Step, Signal, Interception and nested Scope actions held in Entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class Step:
    """Observable marker; n is the expected value of the live step counter."""

    n: int | None = None


@dataclass
class Signal:
    """Raises a fault; n is the fault id assigned when it fires."""

    n: int | None = None


@dataclass
class Interception:
    """Captures the fault inbound to the enclosing scope; n is the id seen (0 = none)."""

    n: int | None = None


@dataclass
class Scope:
    """One independently invoked block of entries."""

    body: list[Entry] = field(default_factory=list)
    budget: int = 0  # fuel allotted by the generator

    def add(self, action: Action, deferred: bool = False) -> Entry:
        entry = Entry(action, deferred)
        self.body.append(entry)
        return entry


Action = Step | Signal | Interception | Scope

LEAF_KINDS = (Step, Signal, Interception)


@dataclass
class Entry:
    """An action plus whether it is deferred (registered now, run at unwind)."""

    action: Action
    deferred: bool = False

    def __post_init__(self) -> None:
        if self.deferred and isinstance(self.action, Interception):
            raise ValueError("Interception cannot be deferred")


def iter_actions(scope: Scope) -> Iterator[Action]:
    """Depth-first walk of every action below scope (not scope itself)."""
    for entry in scope.body:
        yield entry.action
        if isinstance(entry.action, Scope):
            yield from iter_actions(entry.action)


def count_leaves(scope: Scope) -> int:
    return sum(1 for a in iter_actions(scope) if isinstance(a, LEAF_KINDS))


def scope_depth(scope: Scope) -> int:
    nested = [e.action for e in scope.body if isinstance(e.action, Scope)]
    return 1 + max((scope_depth(s) for s in nested), default=0)


def tree_to_dict(scope: Scope) -> dict[str, Any]:
    """Plain-data form of a scope, for the debug YAML dump."""
    body: list[dict[str, Any]] = []
    for entry in scope.body:
        action = entry.action
        if isinstance(action, Scope):
            item: dict[str, Any] = {"scope": tree_to_dict(action)}
        else:
            item = {type(action).__name__.lower(): action.n}
        if entry.deferred:
            item["deferred"] = True
        body.append(item)
    return {"budget": scope.budget, "body": body}
