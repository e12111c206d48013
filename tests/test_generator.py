# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Tests for budget-bounded tree generation."""

from __future__ import annotations

import importlib

import pytest

from deferfuzz.core.deferfuzz import DeferFuzz
from deferfuzz.core.generator_base import GeneratorBase
from deferfuzz.core.tree import (
    Entry,
    Interception,
    Scope,
    Signal,
    Step,
    count_leaves,
    iter_actions,
)

SUITES = ("default", "panic_heavy", "defer_heavy", "nested", "flat")


def _make_fuzz(seed: int = 1, budget: int = 100, suite: str = "default") -> DeferFuzz:
    gen_cls = importlib.import_module(f"deferfuzz.test_suites.{suite}").Generator
    return DeferFuzz(
        generator_factory=lambda f: gen_cls(f),
        seed=seed,
        verbosity="error",
        budget=budget,
    )


def _scopes(scope: Scope):
    yield scope
    for action in iter_actions(scope):
        if isinstance(action, Scope):
            yield action


def test_root_starts_with_catch_all():
    root = _make_fuzz().generator.gen()
    first = root.body[0]
    assert first.deferred
    assert isinstance(first.action, Scope)
    assert len(first.action.body) == 1
    assert isinstance(first.action.body[0].action, Interception)
    assert not first.action.body[0].deferred


def test_zero_budget_yields_only_catch_all():
    root = _make_fuzz(budget=0).generator.gen()
    assert len(root.body) == 1
    assert count_leaves(root) == 1


def test_negative_budget_rejected():
    fuzz = _make_fuzz()
    with pytest.raises(ValueError, match="non-negative"):
        GeneratorBase(fuzz, budget=-1)


@pytest.mark.parametrize("suite", SUITES)
def test_budget_conservation(suite):
    """Leaves never exceed the fuel given to any scope (root adds the catch-all recover)."""
    for seed in range(30):
        fuzz = _make_fuzz(seed=seed, budget=60, suite=suite)
        root = fuzz.generator.gen()
        assert count_leaves(root) - 1 <= 60
        for scope in _scopes(root):
            if scope is root or scope is root.body[0].action:
                continue
            assert count_leaves(scope) <= scope.budget


def test_nested_allotment_never_exceeds_parent():
    for seed in range(30):
        root = _make_fuzz(seed=seed, budget=40).generator.gen()
        for scope in _scopes(root):
            children = [e.action for e in scope.body if isinstance(e.action, Scope)]
            for child in children:
                if scope is root and child is root.body[0].action:
                    continue
                assert child.budget < max(scope.budget, 1)


@pytest.mark.parametrize("suite", SUITES)
def test_interception_never_deferred(suite):
    for seed in range(30):
        root = _make_fuzz(seed=seed, suite=suite).generator.gen()
        for scope in _scopes(root):
            for entry in scope.body:
                if isinstance(entry.action, Interception):
                    assert not entry.deferred


@pytest.mark.parametrize("suite", SUITES)
def test_immediate_signal_ends_scope(suite):
    for seed in range(30):
        root = _make_fuzz(seed=seed, suite=suite).generator.gen()
        for scope in _scopes(root):
            for i, entry in enumerate(scope.body):
                if isinstance(entry.action, Signal) and not entry.deferred:
                    assert i == len(scope.body) - 1


def test_same_seed_same_tree():
    a = _make_fuzz(seed=7).generator.gen()
    b = _make_fuzz(seed=7).generator.gen()
    assert a == b


def test_successive_programs_differ():
    gen = _make_fuzz(seed=3).generator
    trees = [gen.gen() for _ in range(5)]
    assert any(t != trees[0] for t in trees[1:])


def test_flat_suite_has_no_nested_scopes():
    for seed in range(20):
        root = _make_fuzz(seed=seed, suite="flat").generator.gen()
        nested = [a for a in iter_actions(root) if isinstance(a, Scope)]
        assert nested == [root.body[0].action]


def test_generator_name_from_suite_module():
    assert _make_fuzz(suite="panic_heavy").generator.name == "panic_heavy"


def test_budget_taken_from_fuzz_when_not_given():
    fuzz = _make_fuzz(budget=17)
    assert fuzz.generator.budget == 17


def test_leaf_kinds_all_appear():
    kinds = set()
    for seed in range(10):
        root = _make_fuzz(seed=seed).generator.gen()
        kinds.update(type(a) for a in iter_actions(root))
    assert {Step, Signal, Interception, Scope} <= kinds


def test_deferred_interception_unrepresentable():
    with pytest.raises(ValueError):
        Entry(Interception(), deferred=True)
