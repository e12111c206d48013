# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Base generator: budget-bounded random scope trees with a catch-all root."""

from __future__ import annotations

from deferfuzz.core.tree import Entry, Interception, Scope, Signal, Step

DEFAULT_BUDGET = 100

SCOPE = "scope"
INTERCEPTION = "interception"
STEP = "step"
SIGNAL = "signal"


def catch_all() -> Entry:
    """Deferred scope whose only statement recovers whatever escapes main."""
    return Entry(Scope(body=[Entry(Interception())]), deferred=True)


class GeneratorBase:
    """
    Fill scopes with random entries until the budget is spent.

    Leaves cost one unit. A nested scope is given a sub-budget drawn from
    [0, remaining) and refunds whatever it does not use. An immediate Signal
    ends its scope: nothing after it could run.
    """

    WEIGHTS: dict[str, int] = {SCOPE: 4, INTERCEPTION: 3, STEP: 2, SIGNAL: 1}
    DEFER_PROBABILITY = 0.5

    def __init__(self, fuzz: object, budget: int | None = None) -> None:
        if budget is None:
            budget = getattr(fuzz, "budget", DEFAULT_BUDGET)
        if budget < 0:
            raise ValueError(f"Budget must be non-negative, got {budget}")
        self.fuzz = fuzz
        self.random = fuzz.random
        self.budget = budget
        self.name = self.__class__.__module__.rsplit(".", 1)[-1]
        self._kinds = [k for k, w in self.WEIGHTS.items() if w > 0]
        self._weights = [self.WEIGHTS[k] for k in self._kinds]
        if not self._kinds:
            raise ValueError(f"{self.__class__.__name__} has no entry kind with positive weight")

    def gen(self) -> Scope:
        root = Scope(body=[catch_all()], budget=self.budget)
        self.fill(root, self.budget)
        return root

    def fill(self, scope: Scope, budget: int) -> int:
        """Append entries to scope using at most budget; return what is left."""
        while budget > 0:
            deferred = self.random.random() < self.DEFER_PROBABILITY
            kind = self.random.choices(self._kinds, weights=self._weights)[0]

            if kind == SCOPE:
                allotted = self.random.randrange(budget)
                budget -= allotted
                nested = Scope(budget=allotted)
                budget += self.fill(nested, allotted)
                scope.add(nested, deferred)
                continue

            budget -= 1
            if kind == INTERCEPTION and not deferred:
                scope.add(Interception())
            elif kind == SIGNAL:
                scope.add(Signal(), deferred)
                if not deferred:
                    break
            else:
                scope.add(Step(), deferred)
        return budget
